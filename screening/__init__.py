"""
screening/
    __init__.py
    engine.py              # TimecodeEngine: one session (clock + ledger)
    logging_config.py      # colored console, rotating session file, log panels

    timecode/
      codec.py             # frames <-> HH:MM:SS:FF
      clock.py             # drift-free play/stop/seek/fps clock
      scheduler.py         # repeating callback capability (Tk / manual)

    data/
      models.py            # Marker, SortMode, TableRow, TableDocument
      ledger.py            # ordered marker store, monotonic ids

    export/
      formatter.py         # pure text / table / HTML rendering
      exporter.py          # file, document and clipboard actions

    ai/
      gemini_client.py     # google-generativeai wrapper
      summary.py           # prompt + failure-as-text summary service

    utils/
      paths.py env.py config.py exceptions.py tasks.py
"""

__version__ = "0.1.0"

from .engine import TimecodeEngine

__all__ = ["__version__", "TimecodeEngine"]
