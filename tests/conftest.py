"""Shared fixtures for the BST visualizer tests."""

import sys
from pathlib import Path

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from engine import SAMPLE_VALUES, Sequencer
from tree import BinarySearchTree


@pytest.fixture
def sample_tree():
    """50 / 30 70 / 20 40 60 80 — a complete three-level tree."""
    return BinarySearchTree(SAMPLE_VALUES)


@pytest.fixture
def sequencer():
    seq = Sequencer()
    seq.load_sample()
    return seq


@pytest.fixture
def empty_sequencer():
    return Sequencer()
