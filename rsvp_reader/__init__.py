"""RSVP Reader: one word at a time, at a pace you control.

WHY: Rapid Serial Visual Presentation removes eye movement from reading by
flashing each word at a fixed point, with its focus character
highlighted. Paced well, it raises reading speed without losing
comprehension.

HOW: Three layers: the pure core (tokenize text, compute focus points and
delays), the playback controller (a timed state machine), and the
surfaces (terminal player, tkinter desktop window). Text sources and the
analysis service are pluggable collaborators.

RULES:
- The core never does I/O or touches a clock
- Surfaces only render PlaybackState and issue controller commands
"""

__version__ = "0.1.0"
