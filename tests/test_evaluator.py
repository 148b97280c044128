"""
Tests for the Evaluator.

These tests verify:
    - Game counting
    - Epsilon is forced to zero and restored
    - Demo game rendering
    - Plateau detection
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tictactoe_dqn.config import Config
from tictactoe_dqn.ai.agent import DQNAgent
from tictactoe_dqn.ai.evaluator import EvalResults, Evaluator
from tictactoe_dqn.game.tic_tac_toe import PLAYER_O, TicTacToe


@pytest.fixture
def config():
    cfg = Config()
    cfg.HIDDEN_LAYERS = [16]
    cfg.EVAL_GAMES = 20
    return cfg


@pytest.fixture
def game(config):
    return TicTacToe(config)


@pytest.fixture
def agent(game, config, rng):
    return DQNAgent(game.state_size, game.action_size, config, rng=rng)


@pytest.fixture
def evaluator(game, agent, config):
    return Evaluator(game, agent, config, plateau_threshold=2)


def make_results(win_rate):
    return EvalResults(
        timestamp='', episode=0, num_games=10,
        wins=int(win_rate * 10), losses=0, draws=0,
        win_rate=win_rate, loss_rate=0.0, draw_rate=0.0,
        mean_moves=7.0, max_moves=9
    )


class TestEvaluate:
    """Test greedy evaluation."""

    def test_counts_add_up(self, evaluator):
        results = evaluator.evaluate(num_games=15)
        assert results.num_games == 15
        assert results.wins + results.losses + results.draws == 15
        assert results.win_rate + results.loss_rate + results.draw_rate == pytest.approx(1.0)

    def test_default_game_count(self, evaluator, config):
        assert evaluator.evaluate().num_games == config.EVAL_GAMES

    def test_move_counts(self, evaluator):
        results = evaluator.evaluate(num_games=10)
        assert 5 <= results.mean_moves <= 9
        assert results.max_moves <= 9

    def test_epsilon_restored(self, evaluator, agent):
        agent.epsilon = 0.42
        evaluator.evaluate(num_games=3)
        assert agent.epsilon == 0.42

    def test_does_not_touch_memory(self, evaluator, agent):
        evaluator.evaluate(num_games=5)
        assert len(agent.memory) == 0
        assert agent.steps == 0

    def test_agent_as_o(self, game, config, rng):
        agent = DQNAgent(9, 9, config, player=PLAYER_O, rng=rng)
        results = Evaluator(game, agent, config).evaluate(num_games=5)
        assert results.wins + results.losses + results.draws == 5

    def test_to_dict(self, evaluator):
        data = evaluator.evaluate(num_games=2, episode_num=7).to_dict()
        assert data['episode'] == 7
        assert data['num_games'] == 2

    def test_log_results(self, evaluator):
        evaluator.log_results(evaluator.evaluate(num_games=2))


class TestDemoGame:
    """Test the rendered demo game."""

    def test_starts_from_empty_board(self, evaluator):
        boards = evaluator.play_demo_game()
        assert boards[0] == TicTacToe().render()

    def test_one_board_per_move(self, evaluator, game):
        boards = evaluator.play_demo_game()
        assert len(boards) == game.moves_played + 1
        assert boards[-1] == game.render()
        assert game.is_game_over()

    def test_epsilon_restored(self, evaluator, agent):
        agent.epsilon = 0.7
        evaluator.play_demo_game()
        assert agent.epsilon == 0.7


class TestPlateau:
    """Test plateau detection."""

    def test_improvement_resets_counter(self, evaluator):
        evaluator._update_history(make_results(0.5))
        evaluator._update_history(make_results(0.6))
        assert evaluator.best_win_rate == 0.6
        assert evaluator.evals_since_improvement == 0
        assert not evaluator.is_plateau()

    def test_plateau_after_threshold(self, evaluator):
        evaluator._update_history(make_results(0.5))
        evaluator._update_history(make_results(0.5))
        assert not evaluator.is_plateau()
        evaluator._update_history(make_results(0.4))
        assert evaluator.is_plateau()

    def test_summary(self, evaluator):
        assert evaluator.get_summary() == {}
        evaluator._update_history(make_results(0.3))
        summary = evaluator.get_summary()
        assert summary['num_evals'] == 1
        assert summary['latest_win_rate'] == 0.3


class TestGameCountValidation:
    """Test explicit game counts."""

    @pytest.mark.parametrize("num_games", [0, -3])
    def test_non_positive_game_count_rejected(self, evaluator, agent, num_games):
        agent.epsilon = 0.3
        with pytest.raises(ValueError):
            evaluator.evaluate(num_games=num_games)
        assert evaluator.eval_history == []
        assert agent.epsilon == 0.3
