"""Core building blocks.

This package contains everything that does not depend on a particular
terminal library:
- enums.py: colours, glyphs, text flags and their string parsers
- surface.py: the TerminalSurface contract and its configuration
- text_layout.py: word-wrapping for static blocks and live output
- window.py: windows, border windows and the stacking compositor
- console.py: the drawing and input API bound to one surface
- input.py: logical key actions and key bindings
- log_manager.py: in-memory categorized logging
"""
