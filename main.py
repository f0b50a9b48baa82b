#!/usr/bin/env python3
"""
VidSub Entry Point Script

Runs a single video through transcription, translation and SRT generation.
"""

from vidsub.cli import CLIHandler

if __name__ == "__main__":
    cli = CLIHandler()
    cli.run()
