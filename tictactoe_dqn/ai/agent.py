"""
DQN Agent
=========

The AI agent that learns to play Tic-Tac-Toe using Deep Q-Learning.

Key Components:
    1. Policy Network  - Used for action selection, trained every step
    2. Target Network  - Periodically replaced copy used for bootstrap targets
    3. Replay Buffer   - Stores experiences for training
    4. Epsilon-Greedy  - Balances exploration vs exploitation

Training Algorithm (DQN):
    1. Observe state s
    2. Choose action a among the legal moves (epsilon-greedy)
    3. Execute action, observe reward r and next state s'
    4. Store (s, a, r, s', done) in replay buffer
    5. Sample a batch from the replay buffer
    6. Calculate target: y = r + γ * max_a' Q_target(s', a')   (y = r if done)
    7. Regress Q_policy(s, a) toward y, leaving the other actions' outputs
       as their current predictions
    8. Every TARGET_UPDATE steps, replace the target network with a copy
       of the policy network

The sampled experiences are applied as consecutive single-example SGD
steps: example k sees the weights already updated by examples 0..k-1.

References:
    Mnih et al., 2015 - "Human-level control through deep reinforcement learning"
"""

from collections import deque
from typing import Deque, Optional

import numpy as np

from ..config import Config
from ..game.base_game import BaseGame
from ..utils.logger import get_logger
from .network import FeedforwardNetwork
from .replay_buffer import ReplayBuffer


logger = get_logger(__name__)

# Returned by choose_action when the game offers no legal move
NO_ACTION = -1


class DQNAgent:
    """
    DQN Agent for one side of a two-player game.

    The agent maintains two networks:
        - policy_net: Updated every training step
        - target_net: Replaced wholesale every TARGET_UPDATE steps, never
          trained directly

    Action Selection:
        - With probability epsilon: random legal action (exploration)
        - With probability (1-epsilon): legal action with the best Q-value

    Attributes:
        policy_net: Network used for action selection
        target_net: Network used for computing targets
        memory: Experience replay buffer
        epsilon: Current exploration rate
        player: Side this agent plays, as the game identifies players

    Example:
        >>> agent = DQNAgent(state_size=9, action_size=9)
        >>> action = agent.choose_action(game)
        >>> agent.remember(state, action, reward, next_state, done)
        >>> loss = agent.train(batch_size=32, step=total_steps)
    """

    def __init__(
        self,
        state_size: int,
        action_size: int,
        config: Optional[Config] = None,
        player: int = 1,
        rng: Optional[np.random.Generator] = None
    ):
        """
        Initialize the DQN agent.

        Args:
            state_size: Dimension of state vector
            action_size: Number of possible actions
            config: Configuration object
            player: Side this agent plays (the game's player identifier)
            rng: Random source shared by weight init, exploration and sampling
                (defaults to one seeded from config.SEED)
        """
        self.config = config or Config()
        self.state_size = state_size
        self.action_size = action_size
        self.player = player
        self.rng = rng if rng is not None else np.random.default_rng(self.config.SEED)

        self.policy_net = FeedforwardNetwork(
            state_size,
            self.config.HIDDEN_LAYERS,
            action_size,
            activation=self.config.ACTIVATION,
            output_activation='identity',
            rng=self.rng
        )
        self.target_net = self.policy_net.clone()

        self.memory = ReplayBuffer(capacity=self.config.MEMORY_SIZE, rng=self.rng)

        # Hyperparameters
        self.gamma = self.config.GAMMA
        self.learning_rate = self.config.LEARNING_RATE
        self.epsilon = self.config.EPSILON_START
        self.epsilon_min = self.config.EPSILON_END
        self.epsilon_decay = self.config.EPSILON_DECAY
        self.target_update = self.config.TARGET_UPDATE

        # Training step counter (counts batches actually processed)
        self.steps = 0

        # Training metrics (bounded to prevent memory growth during long training)
        self.losses: Deque[float] = deque(maxlen=10000)

        # Track whether last action was exploration
        self.last_action_explored: bool = False

    def choose_action(self, game: BaseGame) -> int:
        """
        Select a legal action using the epsilon-greedy policy.

        Args:
            game: Environment to act in

        Returns:
            Selected action index, or NO_ACTION if there is no legal move
        """
        legal_actions = game.get_legal_actions()
        if not legal_actions:
            return NO_ACTION

        if self.rng.random() < self.epsilon:
            self.last_action_explored = True
            return int(legal_actions[self.rng.integers(len(legal_actions))])

        self.last_action_explored = False
        q_values = self.get_q_values(game.get_state_vector(self.player))

        # max() keeps the first of equal values, so ties go to enumeration order
        return int(max(legal_actions, key=lambda action: q_values[action]))

    def get_q_values(self, state: np.ndarray) -> np.ndarray:
        """Q-values of every action for a state, from the policy network."""
        return self.policy_net.predict(state)

    def remember(
        self,
        state: np.ndarray,
        action: int,
        reward: float,
        next_state: np.ndarray,
        done: bool
    ) -> None:
        """Store an experience in replay memory."""
        self.memory.push(state, action, reward, next_state, done)

    def train(self, batch_size: int, step: int) -> Optional[float]:
        """
        Perform one training step on a sampled batch.

        Args:
            batch_size: Number of experiences to sample
            step: Caller's global step counter; the target network is synced
                whenever it is a multiple of TARGET_UPDATE

        Returns:
            Mean loss over the batch, or None if the buffer does not yet
            hold batch_size experiences (nothing else happens in that case)
        """
        batch = self.memory.sample(batch_size)
        if batch is None:
            return None

        batch_losses = []
        for experience in batch:
            target = self.policy_net.predict(experience.state)

            if experience.done:
                target[experience.action] = experience.reward
            else:
                # Bootstrap only from the target network
                next_q = self.target_net.predict(experience.next_state)
                target[experience.action] = experience.reward + self.gamma * float(np.max(next_q))

            batch_losses.append(
                self.policy_net.train(experience.state, target, self.learning_rate)
            )

        loss = float(np.mean(batch_losses))
        self.losses.append(loss)
        self.steps += 1

        self.decay_epsilon()

        if step % self.target_update == 0:
            self.update_target_network()
            logger.debug(f"Target network updated at step {step}")

        return loss

    def decay_epsilon(self) -> None:
        """Multiply epsilon by the decay rate, never going below the floor."""
        self.epsilon = max(self.epsilon_min, self.epsilon * self.epsilon_decay)

    def update_target_network(self) -> None:
        """Hard sync: replace the target network with a copy of the policy network."""
        self.target_net = self.policy_net.clone()

    def get_average_loss(self, n: int = 100) -> float:
        """Average of the last n training losses (0.0 before any training)."""
        if not self.losses:
            return 0.0
        recent = list(self.losses)[-n:]
        return float(np.mean(recent))
