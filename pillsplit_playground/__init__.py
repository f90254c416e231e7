"""PySide6 playground hosting the pill splitter core.

Run ``pillsplit-playground`` (or ``python -m pillsplit_playground.app``).
"""
