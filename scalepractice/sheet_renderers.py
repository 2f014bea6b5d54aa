"""Renderer implementations for sheet music output formats."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import asdict
from typing import Any, cast

from scalepractice.sheet_models import ScoreDocument


def _escape_html(text: str) -> str:
    """Escape the three characters that are unsafe in HTML text content."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


class SheetRenderer(ABC):
    """Abstract sheet renderer."""

    @property
    @abstractmethod
    def default_extension(self) -> str:
        """Default filename extension for this renderer."""

    @abstractmethod
    def render(
        self,
        *,
        title: str,
        musicxml_bytes: bytes | None = None,
        score_document: ScoreDocument | None = None,
    ) -> str:
        """Render output into a file content string."""


class VerovioHtmlRenderer(SheetRenderer):
    """Render MusicXML bytes as one unbroken staff in an HTML page."""

    #: Verovio zoom in percent.
    ZOOM: int = 40

    def __init__(self, zoom: int = ZOOM) -> None:
        self.zoom = zoom

    @property
    def default_extension(self) -> str:
        return ".html"

    def render(
        self,
        *,
        title: str,
        musicxml_bytes: bytes | None = None,
        score_document: ScoreDocument | None = None,
    ) -> str:
        if musicxml_bytes is None:
            raise ValueError("musicxml_bytes is required for HTML rendering.")

        return self.build_html(title, self.render_svg(musicxml_bytes))

    def toolkit_options(self) -> dict[str, Any]:
        """
        Verovio options for a single system.

        System breaks are turned off and the page is sized to the music, so
        the whole exercise lands on page 1 however many measures it has.
        """
        return {
            "breaks": "none",
            "adjustPageWidth": True,
            "adjustPageHeight": True,
            "header": "none",
            "footer": "none",
            "scale": self.zoom,
        }

    def render_svg(self, musicxml_bytes: bytes) -> str:
        """
        Render a MusicXML document to a single SVG string via verovio.

        Raises:
            ValueError: If verovio cannot load the MusicXML data.
        """
        import verovio

        tk = verovio.toolkit()
        tk.setOptions(self.toolkit_options())
        if not tk.loadData(musicxml_bytes.decode("utf-8")):
            raise ValueError("verovio could not load the MusicXML data.")
        return cast(str, tk.renderToSVG(1))

    def build_html(self, title: str, svg: str) -> str:
        """Wrap the SVG in a self-contained page that scrolls sideways."""
        title_safe = _escape_html(title)
        heading = f"  <h1>{title_safe}</h1>\n" if title else ""

        return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8" />
  <title>{title_safe}</title>
  <style>
    body {{ font-family: Georgia, serif; margin: 2rem; }}
    h1 {{ font-size: 1.4rem; color: #222; }}
    figure.exercise {{ margin: 0; overflow-x: auto; white-space: nowrap; }}
    figure.exercise svg {{ display: block; height: auto; max-width: none; }}
  </style>
</head>
<body>
{heading}  <figure class="exercise">{svg}</figure>
</body>
</html>"""


class VexflowMarkdownRenderer(SheetRenderer):
    """Render a score document into Markdown with an embedded VexFlow script."""

    @property
    def default_extension(self) -> str:
        return ".md"

    def render(
        self,
        *,
        title: str,
        musicxml_bytes: bytes | None = None,
        score_document: ScoreDocument | None = None,
    ) -> str:
        if score_document is None:
            raise ValueError("score_document is required for md-vexflow rendering.")

        title_safe = _escape_html(title)
        score_json = json.dumps(asdict(score_document), separators=(",", ":"))
        score_json = score_json.replace("</", "<\\/")

        return f"""# {title_safe}

Time signature: {score_document.time_signature}

This Markdown uses embedded JavaScript + VexFlow. Open it in a Markdown viewer that allows script execution.

<div id="scalepractice-score"></div>
<script id="scalepractice-score-data" type="application/json">{score_json}</script>
<script type="module">
  import {{
    Accidental,
    Formatter,
    Renderer,
    Stave,
    StaveNote,
    Tuplet,
    Voice
  }} from "https://cdn.jsdelivr.net/npm/vexflow@4.2.3/build/esm/entry/vexflow.js";

  const host = document.getElementById("scalepractice-score");
  const payload = JSON.parse(
    document.getElementById("scalepractice-score-data").textContent || "{{}}"
  );
  const beats = Number(payload.beats) || 4;
  const beatValue = Number(payload.beat_value) || 4;
  const tupletSize = Number(payload.tuplet_size) || 0;
  const measures = Array.isArray(payload.measures) ? payload.measures : [];

  const staveWidth = 320;
  const renderer = new Renderer(host, Renderer.Backends.SVG);
  renderer.resize(staveWidth * Math.max(measures.length, 1) + 40, 160);
  const context = renderer.getContext();

  measures.forEach((measure, index) => {{
    const stave = new Stave(20 + index * staveWidth, 20, staveWidth);
    if (index === 0) {{
      stave.addClef("treble").addTimeSignature(payload.time_signature || "4/4");
    }}
    stave.setContext(context).draw();

    const notes = measure.notes.map((entry) => {{
      const note = new StaveNote({{ clef: "treble", keys: entry.keys, duration: entry.duration }});
      entry.accidentals.forEach((symbol, keyIndex) => {{
        if (symbol) {{
          note.addModifier(new Accidental(symbol), keyIndex);
        }}
      }});
      return note;
    }});

    const tuplets = [];
    if (tupletSize > 0) {{
      for (let i = 0; i + tupletSize <= notes.length; i += tupletSize) {{
        tuplets.push(new Tuplet(notes.slice(i, i + tupletSize)));
      }}
    }}

    const voice = new Voice({{ num_beats: beats, beat_value: beatValue }});
    voice.setMode(Voice.Mode.SOFT);
    voice.addTickables(notes);
    new Formatter().joinVoices([voice]).format([voice], staveWidth - 40);
    voice.draw(context, stave);
    tuplets.forEach((tuplet) => tuplet.setContext(context).draw());
  }});
</script>
"""
