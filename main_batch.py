#!/usr/bin/env python3
"""
VidSub Batch Processing Entry Point

Generates English subtitles for every supported video in a directory.
"""

from vidsub.batch import run_batch_processing

if __name__ == "__main__":
    run_batch_processing()
