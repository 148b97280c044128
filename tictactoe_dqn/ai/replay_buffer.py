"""
Experience Replay Buffer
========================

A memory buffer that stores experiences for training the DQN.

Why Experience Replay?
    1. Breaks correlation between consecutive experiences
       (Neural networks learn poorly from correlated data)

    2. Improves sample efficiency
       (Each experience can be used for multiple training steps)

How it works:
    1. Agent plays, stores (state, action, reward, next_state, done) records
    2. During training, we sample random batches from the buffer
    3. Old experiences are overwritten when buffer is full (FIFO)

References:
    Mnih et al., 2015 - "Human-level control through deep reinforcement learning"
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional

import numpy as np


@dataclass(frozen=True)
class Experience:
    """
    One environment transition.

    State vectors are stored as read-only float64 copies, so an experience
    never changes after it is created.
    """
    state: np.ndarray
    action: int
    reward: float
    next_state: np.ndarray
    done: bool

    def __post_init__(self):
        for name in ('state', 'next_state'):
            array = np.array(getattr(self, name), dtype=np.float64)
            array.setflags(write=False)
            object.__setattr__(self, name, array)
        object.__setattr__(self, 'action', int(self.action))
        object.__setattr__(self, 'reward', float(self.reward))
        object.__setattr__(self, 'done', bool(self.done))


class ReplayBuffer:
    """
    Fixed-size circular buffer of Experience records.

    Example:
        >>> buffer = ReplayBuffer(capacity=10000, rng=np.random.default_rng(0))
        >>> buffer.push(state, action, reward, next_state, done)
        >>> batch = buffer.sample(batch_size=32)   # None until 32 are stored
    """

    def __init__(self, capacity: int, rng: Optional[np.random.Generator] = None):
        """
        Initialize the replay buffer.

        Args:
            capacity: Maximum number of experiences to store
            rng: Random source for sampling
        """
        if capacity <= 0:
            raise ValueError(f"Capacity must be positive, got {capacity}")

        self.capacity = capacity
        self.rng = rng if rng is not None else np.random.default_rng()
        self._slots: List[Optional[Experience]] = [None] * capacity
        self._size = 0  # Current number of experiences stored
        self._position = 0  # Current write position for circular buffer

    def add(self, experience: Experience) -> None:
        """
        Store an experience, overwriting the oldest one when full.
        """
        self._slots[self._position] = experience
        self._position = (self._position + 1) % self.capacity
        self._size = min(self._size + 1, self.capacity)

    def push(
        self,
        state: np.ndarray,
        action: int,
        reward: float,
        next_state: np.ndarray,
        done: bool
    ) -> None:
        """Build an Experience from its fields and add it."""
        self.add(Experience(state, action, reward, next_state, done))

    def sample(self, batch_size: int) -> Optional[List[Experience]]:
        """
        Draw a uniform random batch with replacement.

        Duplicates within one batch are allowed.

        Args:
            batch_size: Number of experiences to sample

        Returns:
            List of batch_size experiences, or None if fewer than
            batch_size experiences are stored

        Raises:
            ValueError: If batch_size is not positive
        """
        if batch_size <= 0:
            raise ValueError(f"Batch size must be positive, got {batch_size}")
        if self._size < batch_size:
            return None

        indices = self.rng.integers(0, self._size, size=batch_size)
        return [self._slots[i] for i in indices]

    def __iter__(self) -> Iterator[Experience]:
        """Iterate over stored experiences, oldest first."""
        start = self._position if self._size == self.capacity else 0
        for offset in range(self._size):
            yield self._slots[(start + offset) % self.capacity]

    def __len__(self) -> int:
        """Return current buffer size."""
        return self._size

    def is_ready(self, batch_size: int) -> bool:
        """Check if buffer has enough experiences for sampling."""
        return self._size >= batch_size

    def clear(self) -> None:
        """Clear all experiences from the buffer."""
        self._slots = [None] * self.capacity
        self._size = 0
        self._position = 0
