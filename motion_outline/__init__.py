"""
motion_outline: garis tepi objek bergerak dari video / webcam (MOG2).

`main` dari modul __main__ diekspor di sini untuk console script
`motion-outline` dan pemanggilan `motion_outline.main()`.
"""
from importlib import import_module as _import_module

main = _import_module(".__main__", package=__name__).main

__all__ = ["main"]
