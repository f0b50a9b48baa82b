"""Command-Line Interface handler for VidSub."""

import argparse
import logging
import sys
from typing import List, Optional

from .config_loader import ConfigLoader
from .context import ProcessingContext
from .exceptions import VidSubError, ConfigurationError
from .log_setup import setup_logging
from .notifications import Notifier
from .progress import ProcessingState
from .session import SubtitleSession

logger = logging.getLogger(__name__)

PREVIEW_BLOCKS = 5

def apply_overrides(config: dict, args: argparse.Namespace) -> dict:
    """Copies CLI overrides (temp dir, device) into the loaded config."""
    if getattr(args, 'temp_dir', None):
        logger.info(f"Overriding temp_dir from config with CLI argument: {args.temp_dir}")
        config['temp_dir'] = args.temp_dir
    if getattr(args, 'device', None):
        logger.info(f"Overriding device from config with CLI argument: {args.device}")
        config['device'] = args.device
    return config

def load_config_or_exit(config_path: Optional[str]) -> dict:
    try:
        return ConfigLoader().load_config(config_path)
    except (ConfigurationError, FileNotFoundError) as e:
        logger.critical(f"Failed to load configuration from {config_path}: {e}")
        sys.exit(1)

def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-c", "--config",
        default=None,
        help="Path to the configuration YAML file. Built-in defaults are used when omitted."
    )
    parser.add_argument(
        "--temp-dir",
        default=None,
        help="Override the temporary directory specified in the config file."
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level for console and file output."
    )
    parser.add_argument(
        "--device",
        default=None,
        choices=["cuda", "cpu"],
        help="Override the processing device (cuda or cpu) specified in config."
    )


class CLIHandler:
    """Parses arguments and runs one video through a SubtitleSession."""

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="vidsub",
            description="VidSub: Transcribe a video and generate English subtitles (.srt).",
            formatter_class=argparse.ArgumentDefaultsHelpFormatter
        )
        parser.add_argument(
            "-v", "--video",
            required=True,
            help="Path to the input video file (MP4, MOV, AVI, MKV, WebM; max 500MB)."
        )
        parser.add_argument(
            "-o", "--output-dir",
            required=True,
            help="Directory to save the generated subtitle file."
        )
        parser.add_argument(
            "--preview",
            action="store_true",
            help=f"Print the first {PREVIEW_BLOCKS} subtitles after processing."
        )
        add_common_arguments(parser)
        return parser

    @staticmethod
    def _log_progress(session: SubtitleSession):
        def listener(state: ProcessingState, percent: int) -> None:
            if state is ProcessingState.IDLE:
                return
            for title, _, status in session.tracker.step_statuses():
                logger.info(f"  [{status:<13}] {title}")
            logger.info(f"{session.tracker.file_name}: {state.value} ({percent}%)")
        return listener

    def run(self, argv: Optional[List[str]] = None) -> None:
        """Parses arguments, sets up logging, loads config and processes the video."""
        args = self.parser.parse_args(argv)
        log_level = getattr(logging, args.log_level.upper(), logging.INFO)

        # Basic logging first so config errors are visible.
        setup_logging(log_level=log_level, log_dir='logs', log_file='vidsub_init.log')
        config = apply_overrides(load_config_or_exit(args.config), args)
        setup_logging(
            log_level=log_level,
            log_dir=config.get('log_dir', 'logs'),
            log_file=config.get('log_file', 'vidsub.log')
        )

        try:
            session = SubtitleSession(ProcessingContext(config), Notifier())
            session.tracker.subscribe(self._log_progress(session))

            video = session.select_video(args.video)
            if video is None:
                sys.exit(1)
            if session.process(video) is None:
                sys.exit(1)

            logger.info(f"Generated {session.subtitle_count} subtitles for {video.name}")
            if args.preview:
                print(session.preview(PREVIEW_BLOCKS))
            if session.download(args.output_dir) is None:
                sys.exit(1)
            sys.exit(0)

        except VidSubError as e:
            logger.error(f"A VidSub error occurred: {e}")
            sys.exit(1)
        except KeyboardInterrupt:
            logger.warning("Process interrupted by user (Ctrl+C). Exiting.")
            sys.exit(1)
        except Exception as e:
            logger.critical(f"An unexpected critical error occurred at the top level: {e}", exc_info=True)
            sys.exit(2)


def main() -> None:
    CLIHandler().run()
