"""
VidSub batch processing.

Processes every supported video in a directory, smallest first, sharing one
set of loaded models, and writes the subtitles to ``<input dir>/Subs``.
"""

import argparse
import logging
import os
import sys
import time
from typing import List, Optional, Set, Tuple

from tqdm import tqdm

from .cli import add_common_arguments, apply_overrides, load_config_or_exit
from .context import ProcessingContext
from .exceptions import ModelInitializationError, FileSystemError
from .log_setup import setup_logging
from .models import VIDEO_MIME_TYPES
from .notifications import Notifier
from .session import SubtitleSession
from .upload import srt_filename
from .utils import ensure_dir_exists

logger = logging.getLogger(__name__)

SUBS_DIR_NAME = "Subs"

def find_and_sort_videos(input_dir: str) -> List[Tuple[str, int]]:
    """
    Finds all supported video files in the input directory and sorts them by size.

    Returns:
        (filepath, filesize) tuples in ascending order of size.

    Raises:
        FileNotFoundError: If the input directory doesn't exist.
        ValueError: If the input path is not a directory.
    """
    if not os.path.exists(input_dir):
        raise FileNotFoundError(f"Input directory not found: {input_dir}")
    if not os.path.isdir(input_dir):
        raise ValueError(f"Input path is not a directory: {input_dir}")

    videos = []
    for filename in os.listdir(input_dir):
        if os.path.splitext(filename)[1].lower() not in VIDEO_MIME_TYPES:
            continue
        filepath = os.path.join(input_dir, filename)
        try:
            if os.path.isfile(filepath):
                videos.append((filepath, os.path.getsize(filepath)))
        except OSError as e:
            logger.warning(f"Could not access file {filepath}: {e}. Skipping.")

    videos.sort(key=lambda item: item[1])
    logger.info(f"Found {len(videos)} video files in {input_dir}.")
    return videos


def _unique_srt_name(video_filename: str, used: Set[str]) -> str:
    """``clip.srt`` unless taken by another video, then ``clip.mp4.srt``."""
    name = srt_filename(video_filename)
    if name in used:
        name = f"{video_filename}.srt"
        logger.warning(f"Subtitle name for {video_filename} collides with another video. Writing {name} instead.")
    used.add(name)
    return name


def process_batch(session: SubtitleSession, video_paths: List[str], output_dir: str) -> Tuple[int, int]:
    """
    Runs each video through the session in turn.

    Videos sharing a base name get distinct subtitle files.

    Returns:
        (processed, failed) counts.
    """
    processed = failed = 0
    used_names: Set[str] = set()
    with tqdm(total=len(video_paths), unit="video", desc="Starting Batch") as pbar:
        for video_path in video_paths:
            video_filename = os.path.basename(video_path)
            pbar.set_description(f"Processing: {video_filename[:30]}")
            try:
                # 1. Validate
                video = session.select_video(video_path)
                if video is None:
                    failed += 1
                    continue
                # 2. Generate
                if session.process(video) is None:
                    failed += 1
                    continue
                # 3. Save
                if session.download(output_dir, _unique_srt_name(video_filename, used_names)):
                    processed += 1
                else:
                    failed += 1
            finally:
                if not session.tracker.in_flight:
                    session.reset()
                pbar.update(1)
    return processed, failed


def run_batch_processing(argv: Optional[List[str]] = None) -> None:
    """Parses arguments, sets up, and runs the batch subtitle generation."""
    parser = argparse.ArgumentParser(
        prog="vidsub-batch",
        description="VidSub Batch: Generate English subtitles for every video in a directory.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        "-i", "--input-dir",
        required=True,
        help="Directory containing the input video files."
    )
    add_common_arguments(parser)
    args = parser.parse_args(argv)

    log_level = getattr(logging, args.log_level.upper(), logging.INFO)
    setup_logging(log_level=log_level, log_dir='logs', log_file='vidsub_batch_init.log')
    config = apply_overrides(load_config_or_exit(args.config), args)
    setup_logging(log_level=log_level, log_dir=config.get('log_dir', 'logs'), log_file=config.get('log_file', 'vidsub_batch.log'))

    try:
        videos = find_and_sort_videos(args.input_dir)
    except (FileNotFoundError, ValueError) as e:
        logger.critical(f"Input directory error: {e}")
        sys.exit(1)
    if not videos:
        logger.warning(f"No supported video files found in {args.input_dir}. Exiting.")
        sys.exit(0)

    output_dir = os.path.join(args.input_dir, SUBS_DIR_NAME)
    try:
        ensure_dir_exists(output_dir)
    except FileSystemError as e:
        logger.critical(f"Could not create output directory: {e}")
        sys.exit(1)

    # Load the models once for the whole batch.
    context = ProcessingContext(config)
    try:
        context.initialize()
    except ModelInitializationError as e:
        logger.critical(f"{e}", exc_info=True)
        sys.exit(1)

    session = SubtitleSession(context, Notifier())
    batch_start_time = time.time()
    logger.info(f"--- Starting Batch Subtitle Generation for {len(videos)} files ---")
    try:
        processed, failed = process_batch(session, [path for path, _ in videos], output_dir)
    except KeyboardInterrupt:
        logger.warning("Batch process interrupted by user (Ctrl+C). Exiting.")
        sys.exit(1)

    logger.info("--- Batch Subtitle Generation Finished ---")
    logger.info(f"Total time: {time.time() - batch_start_time:.2f} seconds")
    logger.info(f"Successfully processed: {processed}/{len(videos)} videos")
    logger.info(f"Failed: {failed}/{len(videos)} videos")
    sys.exit(1 if failed else 0)


def main() -> None:
    run_batch_processing()
