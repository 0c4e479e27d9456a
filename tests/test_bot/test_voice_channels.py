"""Tests for the joined-voice-channel registry."""

from ttsbot.bot.voice_channels import VoiceChannelRegistry


def test_join_and_leave():
    registry = VoiceChannelRegistry()
    registry.joined(1, 100)

    assert registry.get(1) == 100
    assert registry.is_in(1, 100)
    assert not registry.is_in(1, 101)
    assert registry.left(1) == 100
    assert registry.get(1) is None
    assert len(registry) == 0


def test_not_joined_never_matches_no_channel():
    registry = VoiceChannelRegistry()
    assert not registry.is_in(1, None)


def test_rejoin_moves_channel():
    registry = VoiceChannelRegistry()
    registry.joined(1, 100)
    registry.joined(1, 200)
    assert registry.get(1) == 200
    assert len(registry) == 1


def test_left_unknown_guild():
    assert VoiceChannelRegistry().left(5) is None
