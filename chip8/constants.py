"""Shared architecture constants for the CHIP-8 interpreter.

This module centralizes the fixed sizes and offsets of the virtual machine
together with the built-in hexadecimal glyph table.
"""

# 4 KB of byte-addressable memory. Instruction operands address it with
# 12 bits, so every access is masked with ADDRESS_MASK.
MEMORY_SIZE = 0x1000
ADDRESS_MASK = 0xFFF

# Programs are loaded here; everything below is reserved for the interpreter
# (the glyph table lives at the very bottom).
PROGRAM_START = 0x200
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START  # 3584 bytes

NUM_REGISTERS = 16
FLAG_REGISTER = 0xF
STACK_DEPTH = 16
NUM_KEYS = 16

INDEX_MASK = 0xFFFF
PC_MASK = 0xFFFF
BYTE_MASK = 0xFF

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32
SPRITE_WIDTH = 8

GLYPH_START = 0x000
GLYPH_SIZE = 5  # bytes per glyph

# 16 glyphs (0-F), 5 rows each, 4 pixels wide in the high nibble.
FONT_SET = bytes(
    [
        0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
        0x20, 0x60, 0x20, 0x20, 0x70,  # 1
        0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
        0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
        0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
        0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
        0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
        0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
        0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
        0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
        0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
        0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
        0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
        0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
        0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
        0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
    ]
)

# One step per 1/60 s, the pace of the 60 Hz timers.
DEFAULT_STEPS_PER_SECOND = 60
