"""scalepractice — melodic scale exercises: lines, orchestration, notation and MIDI."""

from scalepractice.line import generate_line
from scalepractice.orchestration import orchestrate
from scalepractice.pitch import display_pitch, to_scientific_pitch_notation
from scalepractice.playback import playback_keys, sample_urls

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "display_pitch",
    "generate_line",
    "orchestrate",
    "playback_keys",
    "sample_urls",
    "to_scientific_pitch_notation",
]
