"""Gymnasium environment for Oust."""

from .gym_env import OustEnv, render_board

__all__ = ["OustEnv", "render_board"]
