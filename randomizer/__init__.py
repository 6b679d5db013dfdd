"""
Randomizer Module

This module turns Guild Wars 2 account progress into a weighted randomizer
configuration.

Components:
- storylines.py - Static storyline reference data
- catalog.py - Season and quest indices
- resolver.py - Per-character identity and quest completion
- options.py - Weighted option and trigger generation
- assembler.py - Output document assembly
- documents.py - YAML input/output
- service.py - Pipeline orchestration
"""
