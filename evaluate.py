# -*- coding: utf-8 -*-
"""
Evaluate a move-choosing strategy over many headless games.
"""
import logging
from collections import Counter

from numpy.random import SeedSequence
from tqdm import trange

from strategies.config import AgentConfig, StrategyKind
from strategies.selector import StrategySelector
from tilegame.envs import HeadlessGame

logger = logging.getLogger(__name__)


def game_seeds(seed: int | None) -> tuple[int | None, int | None]:
    """
    Derive independent seeds for the spawns of a game and for its agent.

    Parameters
    ----------
    seed : int, optional
        Seed of the game.

    Returns
    -------
    tuple[int | None, int | None]
        The spawn seed and the agent seed, both ``None`` when ``seed`` is.
    """
    if seed is None:
        return None, None

    spawns, agent = SeedSequence(seed).spawn(2)
    return int(spawns.generate_state(1)[0]), int(agent.generate_state(1)[0])


def evaluate(strategy: str, length: int = 10, seed: int | None = None) -> dict[int, int]:
    """
    Evaluate a strategy.

    Parameters
    ----------
    strategy : str
        The name of the strategy to evaluate.
    length : int, optional
        The number of games to play (default is 10).
    seed : int, optional
        Base seed; game ``i`` derives its seeds from ``seed + i`` for reproducible runs.

    Returns
    -------
    dict[int, int]
        How many games ended on each max tile.
    """
    score = []
    wins = 0

    with trange(length) as period:
        for num in period:
            spawn_seed, agent_seed = game_seeds(None if seed is None else seed + num)
            agent = StrategySelector(AgentConfig(strategy=StrategyKind(strategy), explain_moves=False, seed=agent_seed))
            game = HeadlessGame(seed=spawn_seed)

            # ##: Play a game.
            result = game.play(agent)
            wins += result.is_win

            # ##: Log.
            period.set_description(f"Evaluation: {num + 1}")
            period.set_postfix(score=result.score, max=result.max_tile)

            # ##: Save max cells.
            score.append(result.max_tile)

    logger.info("Strategy %s won %d of %d games", strategy, wins, length)

    # ##: Final log.
    frequency = Counter(score)
    return dict(sorted(frequency.items()))


if __name__ == "__main__":
    from argparse import ArgumentParser

    parser = ArgumentParser()
    parser.add_argument("--strategy", type=str, default="expectimax", choices=[kind.value for kind in StrategyKind])
    parser.add_argument("--games", type=int, default=10)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    result = evaluate(strategy=args.strategy, length=args.games, seed=args.seed)
    print(f"Evaluation of the strategy {args.strategy}, max tiles: {result}")
