"""Playback boundary: keys and sample URLs for an external sampler."""

from scalepractice.pitch import Pitch, to_scientific_pitch_notation


def playback_keys(line: list[Pitch]) -> list[str]:
    """
    Map a line to scientific pitch notation keys, e.g. ``["C4", "D#4"]``.

    Pitches without a notation key are dropped; the sampler plays the rest.
    """
    keys: list[str] = []
    for pitch in line:
        key = to_scientific_pitch_notation(pitch)
        if key is not None:
            keys.append(key)
    return keys


def sample_urls(keys: list[str], base_url: str, extension: str = ".mp3") -> dict[str, str]:
    """
    Build the key → sample URL mapping a sampler loads before playing.

    Sample files are expected to be named after their key, with ``#``
    written as ``s`` so the name is URL-safe: ``C#4`` → ``Cs4.mp3``.

    Args:
        keys:      Scientific pitch notation keys; duplicates are collapsed.
        base_url:  Directory URL holding the samples.
        extension: Sample file extension, including the dot.
    """
    base = base_url.rstrip("/")
    return {
        key: f"{base}/{key.replace('#', 's')}{extension}"
        for key in dict.fromkeys(keys)
    }
