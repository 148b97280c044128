"""
Tests for the Tic-Tac-Toe DQN
=============================

Run all tests:
    pytest tests/

Skip the long XOR convergence run:
    pytest tests/ -m "not slow"
"""
