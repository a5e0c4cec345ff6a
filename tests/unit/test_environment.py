"""
Unit tests for the Gymnasium environment.
"""
import numpy as np
import pytest
from minesweeper import GameSettings, GameStatus, MinesweeperEnv
from minesweeper.environment import CHORD, FLAG, REVEAL, render_ansi


@pytest.fixture
def env() -> MinesweeperEnv:
    return MinesweeperEnv(settings=GameSettings(9, 9, 10), render_mode="ansi")


# ============================================================================
# Space Tests
# ============================================================================

class TestSpaces:
    """Test observation and action spaces."""

    def test_action_space_covers_three_kinds(self, env: MinesweeperEnv) -> None:
        assert env.action_space.n == 3 * 81

    def test_observation_shape(self, env: MinesweeperEnv) -> None:
        obs, info = env.reset(seed=0)
        assert obs.shape == (9, 9)
        assert obs.dtype == np.int8
        assert np.all(obs == -1)
        assert info["game_state"] == "READY"
        assert env.observation_space.contains(obs)

    def test_default_settings_are_beginner(self) -> None:
        env = MinesweeperEnv()
        assert env.observation_space.shape == (9, 9)


# ============================================================================
# Action Encoding Tests
# ============================================================================

class TestActionEncoding:
    """Test action decoding."""

    @pytest.mark.parametrize("kind", [REVEAL, FLAG, CHORD])
    def test_encode_decode(self, env: MinesweeperEnv, kind: int) -> None:
        action = env.encode_action(kind, 7, 2)
        assert env.decode_action(action) == (kind, 7, 2)

    def test_decode_layout(self, env: MinesweeperEnv) -> None:
        """Action 81 + 9 + 3 is a flag on column 3, row 1."""
        assert env.decode_action(81 + 9 + 3) == (FLAG, 3, 1)


# ============================================================================
# Step Tests
# ============================================================================

class TestStep:
    """Test stepping the environment."""

    def test_first_reveal_starts_game(self, env: MinesweeperEnv) -> None:
        env.reset(seed=1)
        obs, reward, terminated, truncated, info = env.step(
            env.encode_action(REVEAL, 4, 4)
        )
        assert obs[4, 4] == 0
        assert reward in (1.0, 10.0)
        assert truncated is False
        assert info["game_state"] in ("PLAYING", "WON")
        assert terminated is (info["game_state"] == "WON")

    def test_flag_reward_and_observation(self, env: MinesweeperEnv) -> None:
        env.reset(seed=1)
        obs, reward, _, _, info = env.step(env.encode_action(FLAG, 0, 0))
        assert reward == 0.0
        assert obs[0, 0] == -2
        assert info["mines_remaining"] == 9

    def test_noop_action_penalized(self, env: MinesweeperEnv) -> None:
        env.reset(seed=1)
        _, reward, _, _, _ = env.step(env.encode_action(CHORD, 0, 0))
        assert reward == pytest.approx(-0.1)

    def test_hitting_mine_terminates(self, env: MinesweeperEnv) -> None:
        env.reset(seed=2)
        env.step(env.encode_action(REVEAL, 4, 4))
        if env.game.status == GameStatus.WON:
            pytest.skip("first click cleared the board")
        mine = next(
            cell for row in env.game.board for cell in row if cell.is_mine
        )
        _, reward, terminated, _, info = env.step(
            env.encode_action(REVEAL, mine.x, mine.y)
        )
        assert reward == -10.0
        assert terminated is True
        assert info["game_state"] == "LOST"

    def test_same_seed_same_game(self) -> None:
        first = MinesweeperEnv()
        second = MinesweeperEnv()
        first.reset(seed=5)
        second.reset(seed=5)
        first.step(first.encode_action(REVEAL, 0, 0))
        second.step(second.encode_action(REVEAL, 0, 0))
        assert first.game.board == second.game.board


# ============================================================================
# Action Mask Tests
# ============================================================================

class TestActionMask:
    """Test valid action mask."""

    def test_new_game_mask(self, env: MinesweeperEnv) -> None:
        env.reset(seed=0)
        mask = env.get_action_mask()
        assert mask.dtype == bool
        assert mask[:81].all()
        assert mask[81:162].all()
        assert not mask[162:].any()

    def test_revealed_cells_masked(self, env: MinesweeperEnv) -> None:
        env.reset(seed=0)
        env.step(env.encode_action(REVEAL, 4, 4))
        mask = env.get_action_mask()
        assert not mask[env.encode_action(REVEAL, 4, 4)]
        assert not mask[env.encode_action(FLAG, 4, 4)]

    def test_mask_empty_after_game_over(self, env: MinesweeperEnv) -> None:
        env.reset(seed=3)
        env.step(env.encode_action(REVEAL, 4, 4))
        for cell in [c for row in env.game.board for c in row if c.is_mine]:
            env.step(env.encode_action(REVEAL, cell.x, cell.y))
        assert not env.get_action_mask().any()


# ============================================================================
# Chord and Win Tests
# ============================================================================

class TestChordAndWin:
    """Test chord actions and the win reward."""

    @pytest.fixture
    def chord_env(self, make_game) -> MinesweeperEnv:
        """5x5 env with mines at (3, 4) and (4, 3)."""
        env = MinesweeperEnv(settings=GameSettings(5, 5, 2))
        env.reset(seed=0)
        env.game = make_game(5, 5, [(3, 4), (4, 3)])
        return env

    def test_chord_bit_set_once_flags_match(self, chord_env: MinesweeperEnv) -> None:
        chord_at_3_3 = chord_env.encode_action(CHORD, 3, 3)
        chord_env.step(chord_env.encode_action(REVEAL, 0, 0))
        assert not chord_env.get_action_mask()[chord_at_3_3]

        chord_env.step(chord_env.encode_action(FLAG, 3, 4))
        assert not chord_env.get_action_mask()[chord_at_3_3]
        chord_env.step(chord_env.encode_action(FLAG, 4, 3))
        assert chord_env.get_action_mask()[chord_at_3_3]

    def test_chord_step_wins(self, chord_env: MinesweeperEnv) -> None:
        chord_env.step(chord_env.encode_action(REVEAL, 0, 0))
        chord_env.step(chord_env.encode_action(FLAG, 3, 4))
        chord_env.step(chord_env.encode_action(FLAG, 4, 3))
        obs, reward, terminated, _, info = chord_env.step(
            chord_env.encode_action(CHORD, 3, 3)
        )
        assert obs[4, 4] == 2
        assert reward == 10.0
        assert terminated is True
        assert info["game_state"] == "WON"

    def test_chord_step_with_wrong_flag_loses(
        self, chord_env: MinesweeperEnv
    ) -> None:
        chord_env.step(chord_env.encode_action(REVEAL, 0, 0))
        chord_env.step(chord_env.encode_action(FLAG, 3, 4))
        chord_env.step(chord_env.encode_action(FLAG, 4, 4))
        _, reward, terminated, _, info = chord_env.step(
            chord_env.encode_action(CHORD, 3, 3)
        )
        assert reward == -10.0
        assert terminated is True
        assert info["game_state"] == "LOST"

    def test_clearing_board_gives_win_reward(self) -> None:
        env = MinesweeperEnv(settings=GameSettings(5, 5, 0))
        env.reset(seed=0)
        _, reward, terminated, _, info = env.step(env.encode_action(REVEAL, 2, 2))
        assert reward == 10.0
        assert terminated is True
        assert info["game_state"] == "WON"
        assert not env.get_action_mask().any()


# ============================================================================
# Render Tests
# ============================================================================

class TestRender:
    """Test text rendering."""

    def test_render_ansi_rows(self, env: MinesweeperEnv) -> None:
        env.reset(seed=0)
        text = env.render()
        assert len(text.splitlines()) == 9
        assert set(text.replace(" ", "").replace("\n", "")) == {"."}

    def test_render_symbols(self) -> None:
        obs = np.array([[-1, -2, 0, 3, 9]], dtype=np.int8)
        assert render_ansi(obs) == ". F   3 * "
