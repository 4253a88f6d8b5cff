"""
Parsers sub-package for axon-parser.

Contains the block parsers that the document parser dispatches to.

Design: Strategy Pattern
- base.py defines the BlockParser ABC and the shared body loop
  (blank lines, ``@end``, end-of-input handling).
- schema.py implements SchemaBlockParser for ``@schema`` blocks.
- data.py implements DataBlockParser for ``@data`` blocks.

The line classifier (detect.py) decides which parser handles a line.
"""

from axon_parser.parsers.base import BlockParser
from axon_parser.parsers.data import DataBlockParser
from axon_parser.parsers.schema import SchemaBlockParser

__all__ = ["BlockParser", "DataBlockParser", "SchemaBlockParser"]
