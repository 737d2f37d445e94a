# CHIP-8 machine configuration.
# Memory - can hold up to 4096 bytes which includes: the fonts and the loaded program.
# CPU - Cowgod's CHIP-8 Technical reference http://devernay.free.fr/hacks/chip8/C8TECH10.HTM#0.0

import os

# ---- Memory ----
MEMORY_SIZE = 4096
PROGRAM_START = 0x200   # programs are loaded at 0x200
FONT_START = 0          # fonts live in the lowest 80 bytes
GLYPH_SIZE = 5

# ---- CPU ----
REGISTER_COUNT = 16
FLAG_REGISTER = 0xF
STACK_DEPTH = 16

# ---- Display ----
SCREEN_WIDTH, SCREEN_HEIGHT = 64, 32
SPRITE_WIDTH = 8

# ---- Rates ----
CPU_HZ = 600
TIMER_HZ = 60

# ---- Sound ----
BEEP_FREQUENCY = 440
BEEP_DURATION = 0.5
BEEP_SAMPLE_RATE = 44100

# set CHIP8VM_LOGS=1 if you want the logs
LOGS_ON = os.environ.get("CHIP8VM_LOGS", "").lower() in ("1", "true", "yes", "on")
