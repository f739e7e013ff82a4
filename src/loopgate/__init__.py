"""Loop nesting depth gate for CI pipelines.

Modules:
- config.py: language tables, ScanConfig and raw-argument parsing.
- frontend.py: tree-sitter parsing lowered into the syntax.py model.
- loop_depth.py: maximum loop nesting depth of a function body.
- file_analyzer.py: per-file function name -> depth mapping.
- scanner.py: directory walk and pass/fail partitioning.
- report.py / cli.py: rendering and the command line.
"""

from loopgate.config import ScanConfig
from loopgate.loop_depth import count_loop_depth
from loopgate.scanner import DirectoryScanner, ScanResult, scan_directory

__all__ = [
    "DirectoryScanner",
    "ScanConfig",
    "ScanResult",
    "count_loop_depth",
    "scan_directory",
]
