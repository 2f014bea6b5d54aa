"""MidiExporter: writes an orchestration to a Standard MIDI File."""

from midiutil import MIDIFile

from scalepractice.orchestration import Orchestration, TimeSignature
from scalepractice.pitch import midi_number

# In midiutil Format 1 MIDI, track 0 is the conductor/tempo track.
TRACK_CONDUCTOR = 0  # Tempo/time signature only
TRACK_MELODY = 1

CHANNEL_MELODY = 0

# MIDI timing clocks per quarter note
CLOCKS_PER_QUARTER = 24


def clocks_per_click(time_signature: TimeSignature) -> int:
    """
    Metronome clocks per click for a meter.

    Simple meters click once per notated beat (24 for a quarter, 12 for an
    eighth). Compound meters click on the dotted beat, so 6/8 gets 36.
    """
    clocks = CLOCKS_PER_QUARTER * 4 // time_signature.beat_duration.value
    return clocks * 3 if time_signature.is_compound else clocks


class MidiExporter:
    """
    Writes a single-melody MIDI file from an orchestration.

    Track layout (Format 1, 2 internal tracks)
    ------------------------------------------
    Track 0 — conductor track (tempo and time signature)

    Track 1 — "Melody" — one note per non-rest event

    Timing
    ------
    Every event lasts its note duration, measured in quarter-note beats:
    beats = whole-note fraction × 4. Rests write nothing and only advance
    the clock, so the file always spans whole measures.
    """

    DEFAULT_TEMPO = 80     # BPM — a comfortable practice tempo
    DEFAULT_VELOCITY = 80  # MIDI velocity (0-127)

    def __init__(
        self,
        tempo: int = DEFAULT_TEMPO,
        velocity: int = DEFAULT_VELOCITY,
    ) -> None:
        """
        Args:
            tempo:    Playback tempo in quarter-note beats per minute.
            velocity: MIDI note-on velocity.
        """
        self.tempo = tempo
        self.velocity = velocity

    def _build(self, orchestration: Orchestration) -> MIDIFile:
        midi = MIDIFile(numTracks=2, removeDuplicates=False, deinterleave=False)

        time_signature = orchestration.time_signature
        midi.addTempo(TRACK_CONDUCTOR, 0, self.tempo)
        midi.addTimeSignature(
            TRACK_CONDUCTOR,
            0,
            time_signature.beats,
            time_signature.beat_duration.value.bit_length() - 1,
            clocks_per_click(time_signature),
        )
        midi.addTrackName(TRACK_MELODY, 0, "Melody")

        beat = 0.0
        for event in orchestration.events:
            length = float(event.duration.length * 4)
            if event.pitch is not None:
                midi.addNote(
                    track=TRACK_MELODY,
                    channel=CHANNEL_MELODY,
                    pitch=midi_number(event.pitch),
                    time=beat,
                    duration=length,
                    volume=self.velocity,
                )
            beat += length
        return midi

    def export(self, orchestration: Orchestration, output_path: str) -> None:
        """
        Render an orchestration to a Standard MIDI File.

        Args:
            orchestration: Measures to write.
            output_path:   Destination file path (e.g. "exercise.mid").

        Raises:
            OSError: If the output file cannot be opened for writing.
        """
        midi = self._build(orchestration)
        with open(output_path, "wb") as f:
            midi.writeFile(f)
