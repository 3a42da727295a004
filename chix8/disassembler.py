"""Text mnemonics for CHIP-8 instructions."""

from typing import Optional

from chix8.decode import DecodedInstruction, decode

_SYSTEM = {0x00E0: "CLS", 0x00EE: "RET"}

_BY_OPCODE = {
    0x1: "JP 0x{nnn:03X}",
    0x2: "CALL 0x{nnn:03X}",
    0x3: "SE V{x:X}, 0x{nn:02X}",
    0x4: "SNE V{x:X}, 0x{nn:02X}",
    0x6: "LD V{x:X}, 0x{nn:02X}",
    0x7: "ADD V{x:X}, 0x{nn:02X}",
    0xA: "LD I, 0x{nnn:03X}",
    0xB: "JP V0, 0x{nnn:03X}",
    0xC: "RND V{x:X}, 0x{nn:02X}",
    0xD: "DRW V{x:X}, V{y:X}, {n}",
}

_REGISTER_PAIR = {0x5: "SE V{x:X}, V{y:X}", 0x9: "SNE V{x:X}, V{y:X}"}

_ALU = {
    0x0: "LD V{x:X}, V{y:X}",
    0x1: "OR V{x:X}, V{y:X}",
    0x2: "AND V{x:X}, V{y:X}",
    0x3: "XOR V{x:X}, V{y:X}",
    0x4: "ADD V{x:X}, V{y:X}",
    0x5: "SUB V{x:X}, V{y:X}",
    0x6: "SHR V{x:X}",
    0x7: "SUBN V{x:X}, V{y:X}",
    0xE: "SHL V{x:X}",
}

_KEY = {0x9E: "SKP V{x:X}", 0xA1: "SKNP V{x:X}"}

_MISC = {
    0x07: "LD V{x:X}, DT",
    0x0A: "LD V{x:X}, K",
    0x15: "LD DT, V{x:X}",
    0x18: "LD ST, V{x:X}",
    0x1E: "ADD I, V{x:X}",
    0x29: "LD F, V{x:X}",
    0x33: "LD B, V{x:X}",
    0x55: "LD [I], V{x:X}",
    0x65: "LD V{x:X}, [I]",
}


def _template(inst: DecodedInstruction) -> Optional[str]:
    if inst.opcode == 0x0:
        return _SYSTEM.get(inst.raw)
    if inst.opcode in _REGISTER_PAIR:
        return _REGISTER_PAIR[inst.opcode] if inst.n == 0 else None
    if inst.opcode == 0x8:
        return _ALU.get(inst.n)
    if inst.opcode == 0xE:
        return _KEY.get(inst.nn)
    if inst.opcode == 0xF:
        return _MISC.get(inst.nn)
    return _BY_OPCODE.get(inst.opcode)


def disassemble(instruction: int) -> str:
    """Render one instruction word, e.g. ``0x6A15 -> 'LD VA, 0x15'``.

    Words outside the instruction set come out as ``DW 0xNNNN``.
    """
    inst = decode(instruction)
    template = _template(inst)
    if template is None:
        return f"DW 0x{inst.raw:04X}"
    return template.format(x=inst.x, y=inst.y, n=inst.n, nn=inst.nn, nnn=inst.nnn)


def disassemble_program(program: bytes, start: int = 0x200) -> list[str]:
    """Disassemble a byte string as consecutive big-endian words.

    Returns lines of the form ``'0x0200  6A15  LD VA, 0x15'``. A trailing odd
    byte is shown as data.
    """
    lines = []
    for offset in range(0, len(program) - 1, 2):
        word = (program[offset] << 8) | program[offset + 1]
        lines.append(f"0x{start + offset:04X}  {word:04X}  {disassemble(word)}")
    if len(program) % 2:
        lines.append(f"0x{start + len(program) - 1:04X}  {program[-1]:02X}    DB 0x{program[-1]:02X}")
    return lines
