# -*- coding: utf-8 -*-
"""
Headless session of the tile-merging game.

This module provides the `HeadlessGame` class, which plays a game to completion without any
rendering, optionally recording every move.
"""

from .headless import GameRecording, HeadlessGame, RecordedMove, SimulationResult

__all__ = ["HeadlessGame", "GameRecording", "RecordedMove", "SimulationResult"]
