"""Gymnasium environment for Falling Block RL."""

from __future__ import annotations

from gymnasium.envs.registration import register

register(
    id="FallingBlock-10x20-v0",
    entry_point="falling_block_rl.env.tetris_env:FallingBlockEnv",
)

__all__: list = []
