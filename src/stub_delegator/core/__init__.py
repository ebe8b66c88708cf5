"""
Core Package.

Contains the generator pipeline:
- Grammar fragments and the stub signature parser
- The dual-file rewriter and text buffer abstractions
- The generation engine, scanner and trace logger
"""
