"""Pygame frontend for the CHIP-8 interpreter."""

from __future__ import annotations

import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from pychip8.bus import MemoryFault
from pychip8.cpu import CPUError
from pychip8.loader import ProgramLoadError
from pychip8.system import Machine, MachineConfig, create_machine
from pychip8.utils import TraceRecorder, debug_enabled, debug_log
from pychip8.video import MONOCHROME, Renderer
from pychip8.video.palette import RGBColor


@dataclass
class AppConfig:
    """Configuration for the CHIP-8 frontend."""

    rom_path: Optional[Path] = None
    scale: int = 10
    cycles_per_second: int = 600
    fullscreen: bool = False
    strict_memory: bool = False
    strict_illegal: bool = False
    seed: Optional[int] = None
    palette: Tuple[RGBColor, RGBColor] = MONOCHROME


class Chip8App:
    """Owns the pygame loop: input, cycle scheduling and presentation."""

    def __init__(self, config: AppConfig) -> None:
        self._config = config
        self._running = False
        self._machine: Machine | None = None
        self._renderer = Renderer(config.palette)
        self._debug_overlay = debug_enabled("overlay")
        self._overlay_columns = 16
        self._overlay_font = None
        self._perf_enabled = debug_enabled("perf")
        self._perf_frame = 0
        self._trace_recorder: TraceRecorder | None = None
        if debug_enabled("trace"):
            self._trace_recorder = TraceRecorder(512)
        self._reported_invalid: set[int] = set()

    @property
    def machine(self) -> Machine | None:
        return self._machine

    def run(self) -> None:
        try:
            import pygame  # type: ignore
        except ImportError as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to run the UI") from exc

        if not self._config.rom_path:
            raise RuntimeError("Program image is required; pass --rom <path>")
        machine = self._create_machine(self._config.rom_path)
        self._machine = machine

        pygame.init()
        pygame.display.set_caption(f"CHIP-8 - {self._config.rom_path.name}")

        scale = max(1, self._config.scale)
        display_width = machine.framebuffer.width * scale
        display_height = machine.framebuffer.height * scale
        overlay_width = self._overlay_columns * 8 * 2 if self._debug_overlay else 0

        flags = pygame.FULLSCREEN if self._config.fullscreen else 0
        screen = pygame.display.set_mode((display_width + overlay_width, display_height), flags)
        clock = pygame.time.Clock()
        self._running = True

        try:
            while self._running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self._running = False
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                        self._running = False
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_F5:
                        machine.restart()
                        self._reported_invalid.clear()
                    elif event.type == pygame.KEYDOWN:
                        self._handle_key_event(pygame, event.key, pressed=True)
                    elif event.type == pygame.KEYUP:
                        self._handle_key_event(pygame, event.key, pressed=False)

                frame_start = time.perf_counter()
                executed = self._run_frame(machine)

                frame = self._renderer.render(machine.framebuffer, scale=scale)
                screen.blit(frame.to_surface(), (0, 0))
                if self._debug_overlay and overlay_width > 0:
                    overlay = self._draw_overlay(pygame, machine, overlay_width, display_height)
                    screen.blit(overlay, (display_width, 0))
                pygame.display.flip()

                frame_duration = time.perf_counter() - frame_start
                if self._perf_enabled and frame_duration > 0:
                    self._perf_frame += 1
                    debug_log(
                        "perf",
                        "frame=%d cycles=%d frame_ms=%.3f effective_hz=%.1f",
                        self._perf_frame,
                        executed,
                        frame_duration * 1000.0,
                        executed / frame_duration,
                    )

                clock.tick(_FRAME_RATE)
        finally:
            pygame.quit()

    def _create_machine(self, rom_path: Path) -> Machine:
        if not rom_path.exists():
            raise RuntimeError(f"Program file not found: {rom_path}")
        try:
            machine = create_machine(
                MachineConfig(
                    program_image=rom_path.read_bytes(),
                    program_name=rom_path.name,
                    strict_memory=self._config.strict_memory,
                    strict_illegal=self._config.strict_illegal,
                    seed=self._config.seed,
                    trace=self._trace_recorder,
                    invalid_opcode_callback=self._handle_invalid_opcode,
                )
            )
        except ProgramLoadError as exc:
            raise RuntimeError(f"Failed to load program {rom_path}: {exc}") from exc
        self._machine = machine
        return machine

    def _cycles_per_frame(self) -> int:
        return max(1, self._config.cycles_per_second // _FRAME_RATE)

    def _run_frame(self, machine: Machine) -> int:
        cycles = self._cycles_per_frame()
        try:
            return machine.cpu.run(cycles)
        except (CPUError, MemoryFault) as exc:
            self._running = False
            if self._trace_recorder is not None:
                self._trace_recorder.dump("trace", limit=32)
            raise RuntimeError(
                f"Interpreter fault at pc={machine.state.program_counter:03X}: {exc}") from exc

    def _handle_invalid_opcode(self, word: int, pc: int) -> None:
        if pc in self._reported_invalid:
            return
        self._reported_invalid.add(pc)
        print(f"warning: invalid opcode {word:04X} at {pc:03X}", file=sys.stderr)

    def _handle_key_event(self, pygame, key_code: int, *, pressed: bool) -> None:
        machine = self._machine
        if machine is None:
            return
        name = pygame.key.name(key_code)
        canonical = _canonical_name(name)
        if debug_enabled("input"):
            debug_log("input", "event=%s canonical=%s pressed=%s", name, canonical, pressed)
        if canonical is None:
            return
        if pressed:
            machine.keypad.press(canonical)
        else:
            machine.keypad.release(canonical)

    def _draw_overlay(self, pygame, machine: Machine, width: int, height: int):
        surface = pygame.Surface((width, height))
        surface.fill((0, 0, 0))

        font_size = 14
        if self._overlay_font is None:
            pygame.font.init()
            font_name = pygame.font.match_font("menlo,dejavusansmono,couriernew,consolas,monospace")
            if not font_name:
                font_name = pygame.font.get_default_font()
            self._overlay_font = pygame.font.Font(font_name, font_size)
        font_obj = self._overlay_font

        y = 4
        for text in _overlay_lines(machine):
            rendered = font_obj.render(text, False, (255, 255, 255))
            surface.blit(rendered, (4, y))
            y += font_size + 2
            if y > height:
                break
        return surface


def _overlay_lines(machine: Machine) -> list[str]:
    state = machine.state
    lines = [
        f"PC  {state.program_counter:03X}",
        f"I   {state.index_register:03X}",
        f"SP  {state.stack.depth:02d}",
        f"DT  {state.delay_timer:02X}",
        f"ST  {state.sound_timer:02X}",
    ]
    for index in range(0, len(state.registers), 2):
        lines.append(
            f"V{index:X} {state.registers[index]:02X}  V{index + 1:X} {state.registers[index + 1]:02X}")
    keys = "".join(f"{index:X}" if pressed else "." for index, pressed in enumerate(machine.keypad.snapshot()))
    lines.append(f"K {keys}")
    return lines


def _canonical_name(name: str) -> str | None:
    lowered = name.lower()
    if len(lowered) == 1:
        return lowered
    return None


_FRAME_RATE = 60
