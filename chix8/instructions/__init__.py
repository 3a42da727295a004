"""CHIP-8 instruction handlers, grouped by leading opcode nibble."""
