"""
A course processing package for muxing, probing, and merging video clips.

This package turns a downloaded video course (a course directory holding one
subdirectory per module, each containing numbered clips and optional subtitle
sidecars) into one video per module with embedded chapter metadata. All media
work is delegated to an external ffmpeg binary.

The package is organized into several categories:
- Media tool invocation and version checking (``media``).
- Per-clip preprocessing: subtitle muxing and duration probing (``clips``).
- Per-module assembly: metadata records, chapters and concatenation (``modules``).
- The two-phase course pipeline (``pipeline``).
- Shared constants, logging and filesystem helpers (``utils``).
"""

__version__ = "1.0.0"

# Debug flag for controlling verbose output
DEBUG: bool = False

__all__ = ["__version__", "DEBUG"]
