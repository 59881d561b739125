from chip8.cpu import Chip8, StepResult
from chip8.decoder import decode
from chip8.display import Pixel
from chip8.errors import Chip8Error, ErrorKind

__all__ = ["Chip8", "Chip8Error", "ErrorKind", "Pixel", "StepResult", "decode"]
