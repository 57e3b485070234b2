"""
utils/input_selector.py
Prompt konsol untuk memilih sumber video: 1 = file video, 2 = webcam.
Pembacaan baris & penulisan output bisa di-inject agar mudah dites.
"""
import logging
from typing import Callable, Optional

from ..models.source_config import SourceKind, SourceConfig, file_source, camera_source

logger = logging.getLogger(__name__)

CHOICE_PROMPT = "Enter 1 for a video file, or 2 for using the webcam."
PATH_PROMPT = "Enter the full file path of the video file."
INVALID_CHOICE = "Invalid number, please try again"


def parse_choice(line: str) -> Optional[SourceKind]:
    """
    Parse satu baris input menjadi SourceKind.

    Returns:
        SourceKind.FILE / SourceKind.CAMERA, atau None jika bukan integer
        atau bukan 1 / 2
    """
    text = line.strip()
    # int() juga menerima digit non-ASCII (mis. fullwidth "１")
    if not text.isascii():
        return None
    try:
        value = int(text)
    except ValueError:
        return None
    if value not in (SourceKind.FILE, SourceKind.CAMERA):
        return None
    return SourceKind(value)


def _strip_line_ending(line: str) -> str:
    return line.rstrip("\r\n")


def select_source(read_line: Optional[Callable[[], str]] = None,
                  write: Optional[Callable[[str], None]] = None) -> SourceConfig:
    """
    Tanya user sampai pilihan valid, lalu bangun SourceConfig.

    Args:
        read_line: Fungsi pembaca satu baris (default input()); EOFError
            diteruskan ke pemanggil
        write: Fungsi penulis satu baris (default print)

    Returns:
        SourceConfig untuk file (path apa adanya) atau kamera default
    """
    read_line = read_line or input
    write = write or print

    while True:
        write(CHOICE_PROMPT)
        line = read_line()
        choice = parse_choice(line)
        if choice is not None:
            break
        logger.debug(f"Rejected source choice: {line!r}")
        write(INVALID_CHOICE)

    write(f"You entered: {int(choice)}\n")

    if choice == SourceKind.FILE:
        write(PATH_PROMPT)
        # Path tidak dicek di sini; kegagalan muncul saat source dibuka
        return file_source(_strip_line_ending(read_line()))
    return camera_source()
