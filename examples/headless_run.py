"""Run a tiny CHIP-8 program without a window and print the screen as text."""

from chipjax import Engine, EngineConfig

# Draws the hex digits 0..F in two rows, then loops forever
PROGRAM = bytes([
    0x60, 0x00,  # 200: V0 = 0        digit
    0x61, 0x01,  # 202: V1 = 1        x
    0x62, 0x01,  # 204: V2 = 1        y
    0xF0, 0x29,  # 206: I = glyph(V0)
    0xD1, 0x25,  # 208: draw at (V1, V2)
    0x70, 0x01,  # 20A: V0 += 1
    0x71, 0x05,  # 20C: V1 += 5
    0x30, 0x08,  # 20E: skip if V0 == 8
    0x12, 0x16,  # 210: jump 216
    0x61, 0x01,  # 212: V1 = 1
    0x72, 0x07,  # 214: V2 += 7
    0x30, 0x10,  # 216: skip if V0 == 16
    0x12, 0x06,  # 218: jump 206
    0x12, 0x1A,  # 21A: jump 21A
])


def render_text(display) -> str:
    return "\n".join("".join("#" if pixel else "." for pixel in row) for row in display)


if __name__ == "__main__":
    engine = Engine(EngineConfig(frame_synced_draw=True))
    engine.load(PROGRAM)
    display = engine.run(frames=30, progress=True)
    print(render_text(display))
