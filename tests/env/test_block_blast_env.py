"""
Tests for block_blast.env

Gymnasium wrapper around the grid engine.
"""

import gymnasium as gym
import numpy as np
import pytest

import block_blast.env  # noqa: F401
from block_blast.env.block_blast_env import BlockBlastEnv, compute_action_mask
from block_blast.env.wrappers import ResampleInvalidActionWrapper
from block_blast.game import Piece, PieceColor, PieceKind


# Bottom-right corner never fits a multi-cell piece
CORNER_ACTION = 63


@pytest.fixture
def env() -> BlockBlastEnv:
    e = BlockBlastEnv()
    e.reset(seed=0)
    return e


class TestReset:
    def test_observation_layout(self):
        e = BlockBlastEnv()
        obs, info = e.reset(seed=0)
        assert set(obs) == {"grid", "current", "next", "level"}
        assert obs["grid"].shape == (8, 8)
        assert np.all(obs["grid"] == 0)
        assert obs["level"] == 1
        assert e.observation_space.contains(obs)
        assert info["score"] == 0

    def test_mask_matches_valid_placements(self, env: BlockBlastEnv):
        mask = env.action_masks()
        assert mask.shape == (64,)
        assert mask.sum() == len(env.game.valid_placements())

    def test_seed_is_reproducible(self):
        a, _ = BlockBlastEnv().reset(seed=3)
        b, _ = BlockBlastEnv().reset(seed=3)
        np.testing.assert_array_equal(a["current"], b["current"])
        np.testing.assert_array_equal(a["next"], b["next"])


class TestStep:
    def test_valid_action_places(self, env: BlockBlastEnv):
        action = int(np.flatnonzero(env.action_masks())[0])
        obs, reward, terminated, truncated, info = env.step(action)
        assert info["placed"] is True
        assert reward >= 0.0
        assert np.count_nonzero(obs["grid"]) > 0

    def test_invalid_action_penalized(self, env: BlockBlastEnv):
        obs, reward, terminated, truncated, info = env.step(CORNER_ACTION)
        assert info["placed"] is False
        assert reward == env.invalid_action_penalty
        assert np.all(obs["grid"] == 0)
        assert not terminated

    def test_out_of_range_action_raises(self, env: BlockBlastEnv):
        with pytest.raises(ValueError):
            env.step(64)

    def test_clear_rewards_engine_score(self, env: BlockBlastEnv):
        i_piece = Piece(PieceKind.I, PieceColor.RED)
        env.game._current_piece = i_piece
        env.step(7 * 8 + 0)
        env.game._current_piece = i_piece
        _, reward, _, _, info = env.step(7 * 8 + 4)
        assert reward == 10.0
        assert info["lines_cleared_step"] == 1
        assert info["level"] == 2

    def test_truncates_after_max_steps(self):
        e = BlockBlastEnv(max_episode_steps=2)
        e.reset(seed=0)
        _, _, _, truncated, _ = e.step(CORNER_ACTION)
        assert not truncated
        _, _, _, truncated, _ = e.step(CORNER_ACTION)
        assert truncated

    def test_terminates_on_game_over(self, env: BlockBlastEnv):
        env.game.place_piece(Piece(PieceKind.I, PieceColor.RED), 0, 0)
        env.game._current_piece = Piece(PieceKind.O, PieceColor.TEAL)
        _, _, terminated, _, info = env.step(6 * 8 + 6)
        assert terminated
        assert not info["action_mask"].any()
        assert not compute_action_mask(env.game).any()

    def test_terminates_when_piece_fits_nowhere(self, env: BlockBlastEnv):
        """No valid placement ends the episode even before the engine calls game over."""
        env.game.grid.grid[:, 1:] = 1
        env.game._current_piece = Piece(PieceKind.O, PieceColor.TEAL)
        assert not env.game.game_over
        _, reward, terminated, truncated, info = env.step(0)
        assert reward == env.invalid_action_penalty
        assert terminated
        assert not truncated
        assert not info["action_mask"].any()


class TestRender:
    def test_rgb_array(self):
        e = BlockBlastEnv(render_mode="rgb_array")
        e.reset(seed=0)
        img = e.render()
        assert img.shape == (96, 96, 3)
        assert img.dtype == np.uint8

    def test_unknown_render_mode(self):
        with pytest.raises(ValueError):
            BlockBlastEnv(render_mode="human")


class TestRegistrationAndWrappers:
    def test_gym_make(self):
        e = gym.make("BlockBlast-8x8-v0")
        obs, info = e.reset(seed=1)
        assert isinstance(e.unwrapped, BlockBlastEnv)
        assert "action_mask" in info
        e.close()

    def test_resample_invalid_action(self):
        e = ResampleInvalidActionWrapper(BlockBlastEnv())
        e.reset(seed=0)
        _, _, _, _, info = e.step(CORNER_ACTION)
        assert info["placed"] is True
