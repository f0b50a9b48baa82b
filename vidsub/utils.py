"""Utility functions for VidSub."""

import os
import logging
from decimal import Decimal
from .exceptions import FileSystemError

logger = logging.getLogger(__name__)

def ensure_dir_exists(dir_path: str) -> None:
    """
    Ensures that a directory exists. Creates it if it doesn't.

    Args:
        dir_path: The path to the directory.

    Raises:
        FileSystemError: If the directory cannot be created due to permissions
                         or if the path exists but is not a directory.
    """
    if not dir_path:
        raise ValueError("Directory path cannot be empty.")
    try:
        if not os.path.exists(dir_path):
            os.makedirs(dir_path)
            logger.info(f"Created directory: {dir_path}")
        elif not os.path.isdir(dir_path):
            raise FileSystemError(f"Path exists but is not a directory: {dir_path}")
    except OSError as e:
        logger.error(f"Error creating or accessing directory {dir_path}: {e}", exc_info=True)
        raise FileSystemError(f"Could not create or access directory {dir_path}: {e}") from e

def format_time_srt(seconds: float) -> str:
    """
    Formats seconds into SRT time format HH:MM:SS,mmm.

    Every component is truncated, never rounded. The decimal form of the value
    is used so that e.g. 3661.999 keeps its 999 milliseconds instead of losing
    one to binary floating point.

    Args:
        seconds: Time in seconds.

    Returns:
        Formatted time string.
    """
    if seconds < 0:
        seconds = 0.0
    total_ms = int(Decimal(str(seconds)) * 1000)
    hrs, total_ms = divmod(total_ms, 3600000)
    mins, total_ms = divmod(total_ms, 60000)
    secs, milliseconds = divmod(total_ms, 1000)
    return f"{hrs:02d}:{mins:02d}:{secs:02d},{milliseconds:03d}"

def resolve_device(device: str) -> str:
    """
    Validates the requested torch device, falling back to CPU when CUDA is missing.

    Raises:
        ValueError: If the device is neither 'cuda' nor 'cpu'.
    """
    if device not in ["cuda", "cpu"]:
        raise ValueError(f"Invalid device specified: {device}. Choose 'cuda' or 'cpu'.")
    if device == "cuda":
        import torch
        if not torch.cuda.is_available():
            logger.warning("CUDA device requested but not available. Falling back to CPU.")
            return "cpu"
    return device
