import time

from chix8 import Chip8, MachineConfig, display_to_text, chip8_display_to_rgb, create_color_scheme
from chix8.constants import KEY_MAP, KEYPAD_LAYOUT
from chix8.disassembler import disassemble_program


# Draws the hex digits 0-F across the screen, then waits for a key
PROGRAM = bytes([
    0x60, 0x00,  # 0x200: V0 = 0         digit
    0x61, 0x01,  # 0x202: V1 = 1         x
    0x62, 0x02,  # 0x204: V2 = 2         y
    0xF0, 0x29,  # 0x206: I = font(V0)
    0xD1, 0x25,  # 0x208: draw
    0x70, 0x01,  # 0x20A: V0 += 1
    0x71, 0x05,  # 0x20C: V1 += 5
    0x30, 0x10,  # 0x20E: skip if V0 == 16
    0x12, 0x06,  # 0x210: loop
    0xF3, 0x0A,  # 0x212: V3 = key
    0x12, 0x14,  # 0x214: halt
])


if __name__ == "__main__":
    print("\n".join(disassemble_program(PROGRAM)))

    machine = Chip8(PROGRAM, config=MachineConfig(log_level="DEBUG"))

    start = time.perf_counter()
    machine.run(frames=10, realtime=False)
    end = time.perf_counter()

    print(display_to_text(machine.state.display))
    print(f"Executed {machine.cycles_emulated} instructions in {end - start:.3f}s")

    host_keys = {key: char for char, key in KEY_MAP.items()}
    for row in KEYPAD_LAYOUT:
        print("  ".join(f"{key:X}:{host_keys[key]}" for key in row))

    # "z" sits on keypad A
    machine.press_key(KEY_MAP["z"])
    machine.run(frames=1, realtime=False)
    print(f"V3 = {int(machine.state.V[3]):X}")

    on_color, off_color = create_color_scheme("amber")
    frame = chip8_display_to_rgb(machine.state.display, scale=4, on_color=on_color, off_color=off_color)
    print("RGB frame:", frame.shape)
