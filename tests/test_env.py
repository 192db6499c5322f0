import gymnasium as gym
import numpy as np

import blocks_puzzle.env  # noqa: F401
from blocks_puzzle.env.blocks_env import BlocksEnv
from blocks_puzzle.env.wrappers import FlattenDiscreteActionWrapper
from blocks_puzzle.game import GameConfig


def _first_valid(info):
    return tuple(int(i) for i in np.argwhere(info["action_mask"])[0])


def test_reset_deals_full_hand():
    env = BlocksEnv(GameConfig(width=6, height=6, pieces_per_hand=3))
    obs, info = env.reset(seed=3)
    assert obs["grid"].shape == (6, 6)
    assert obs["pieces_remaining"] == 3
    assert (obs["pieces"] >= 0).all()
    assert info["action_mask"].shape == (3, 6, 6)
    assert info["score"] == 0
    assert env.model.history.current == 0
    assert env.observation_space.contains(obs)


def test_valid_step_rewards_score_delta():
    env = BlocksEnv(GameConfig(width=6, height=6))
    obs, info = env.reset(seed=0)
    action = _first_valid(info)
    cells = env.model.piece(action[0]).cell_count()
    obs, reward, terminated, truncated, info = env.step(action)
    assert reward == cells
    assert info["score"] == cells
    assert obs["pieces"][action[0]] == -1
    assert obs["pieces_remaining"] == 2
    assert env.model.history.current == 1
    assert not truncated


def test_invalid_step_is_penalised_and_leaves_model_alone():
    env = BlocksEnv(GameConfig(width=6, height=6), invalid_action_penalty=-2.0)
    obs, info = env.reset(seed=1)
    before = env.model.cells.copy()
    # every catalogue piece spans at least two cells in one direction
    assert not info["action_mask"][0, 5, 5]
    obs, reward, terminated, truncated, info = env.step((0, 5, 5))
    assert reward == -2.0
    assert info["score"] == 0
    assert np.array_equal(env.model.cells, before)
    assert env.model.history.current == 0


def test_new_hand_after_all_slots_used():
    env = BlocksEnv(GameConfig(width=10, height=10, pieces_per_hand=2))
    obs, info = env.reset(seed=5)
    for _ in range(2):
        obs, reward, terminated, truncated, info = env.step(_first_valid(info))
    assert obs["pieces_remaining"] == 2
    assert env.model.hand_size() == 2


def test_episode_runs_to_termination():
    env = BlocksEnv(GameConfig(width=5, height=5, max_episode_steps=500))
    obs, info = env.reset(seed=2)
    terminated = truncated = False
    steps = 0
    while not (terminated or truncated):
        obs, reward, terminated, truncated, info = env.step(_first_valid(info))
        assert reward >= 0
        steps += 1
    assert steps <= 500
    if terminated:
        assert not info["action_mask"].any()


def test_ansi_render_is_text_board():
    env = BlocksEnv(GameConfig(width=4, height=4), render_mode="ansi")
    env.reset(seed=0)
    text = env.render()
    assert text.startswith("....\n" * 4)
    assert "Score: 0." in text


def test_rgb_render_shape():
    env = BlocksEnv(GameConfig(width=4, height=3), render_mode="rgb_array")
    env.reset(seed=0)
    assert env.render().shape == (36, 48, 3)


def test_registered_env_and_flatten_wrapper():
    env = FlattenDiscreteActionWrapper(gym.make("Blocks-v0"))
    obs, info = env.reset(seed=4)
    assert env.action_space.n == 3 * 10 * 10
    mask = env.get_action_mask()
    assert mask.shape == (300,)
    idx = int(np.flatnonzero(mask)[0])
    assert tuple(env.action(idx)) == np.unravel_index(idx, (3, 10, 10))
    obs, reward, terminated, truncated, info = env.step(idx)
    assert reward > 0
