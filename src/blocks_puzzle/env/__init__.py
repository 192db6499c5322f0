"""Gymnasium environments for the Blocks engine."""

from __future__ import annotations

from gymnasium.envs.registration import register

register(
    id="Blocks-v0",
    entry_point="blocks_puzzle.env.blocks_env:BlocksEnv",
)

__all__ = ["Blocks-v0"]
