"""Package entry point for ``python -m rsvp_reader``.

WHY: Users run the reader as ``python -m rsvp_reader notes.txt`` for the
terminal player, or ``python -m rsvp_reader --gui [notes.txt]`` for the
desktop window.

HOW: Checks sys.argv for the ``--gui`` flag. If present, loads the
optional file and launches the Tkinter GUI. Otherwise, delegates to the
CLI's main() function.

RULES:
- ``--gui`` flag launches the Tkinter GUI
- Without ``--gui``, falls through to the CLI
"""

import sys

if __name__ == "__main__":
    if "--gui" in sys.argv:
        from rsvp_reader.gui import main as gui_main
        from rsvp_reader.sources import ExtractionError, extract_file

        paths = [a for a in sys.argv[1:] if a != "--gui"]
        text = ""
        if paths:
            try:
                text = extract_file(paths[0]).text
            except ExtractionError as e:
                print("Error: {}".format(e), file=sys.stderr)
                sys.exit(1)
        gui_main(text)
    else:
        from rsvp_reader.cli import main
        main()
