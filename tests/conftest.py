import os
import sys
import pytest
from unittest.mock import MagicMock, patch

# Ensure spatial_engine can be imported from a source checkout
sys.path.append(os.getcwd())


@pytest.fixture
def mock_mixer():
    """
    Patch pygame.mixer so channel-backed instances run headless.
    """
    with patch('pygame.mixer') as mixer:
        channel = MagicMock()
        channel.get_busy.return_value = True
        mixer.find_channel.return_value = channel
        yield mixer


@pytest.fixture
def world():
    """Fresh World for each test."""
    from spatial_engine.core.world import World
    return World()


@pytest.fixture
def store():
    """Empty SoundInstanceStore."""
    from spatial_engine.audio.instances import SoundInstanceStore
    return SoundInstanceStore()


@pytest.fixture
def config():
    from spatial_engine.audio.config import SpacialAudioConfig
    return SpacialAudioConfig(max_distance=100.0)


@pytest.fixture
def receiver():
    """Receiver at the origin with default orientation (right = +X)."""
    from spatial_engine.audio.components import AudioReceiver
    from spatial_engine.components.transform import Transform
    return (Transform(), AudioReceiver())


@pytest.fixture
def spy_store():
    """Store double that records every lookup and write."""
    spy = MagicMock()
    spy.get.return_value = MagicMock()
    return spy
