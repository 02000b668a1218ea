#!/usr/bin/env python3

"""
Host Scheduler

Drives a Machine from real time.  There are two clocks, and they are kept
apart:

    * The instruction clock calls step() at the configured rate (instructions
      per second).
    * The 60Hz clock ticks the timers, polls the inputs, switches the buzzer,
      and redraws the screen if anything was drawn.

Both are accumulator-based.  Elapsed host time is added to each accumulator,
and every whole interval owed is paid out, oldest event first, so a slow host
frame is caught up without coupling instruction throughput to the frame rate.
The backlog is capped, so a host that stalls for a long time (e.g. a window
being dragged) doesn't cause a burst of catch-up work.

The instruction clock can be paused for single-stepping.  The 60Hz clock never
stops, just as it doesn't while the CPU waits for a keypress.
"""

__copyright__ = "Copyright (C) 2024 Chippy8 Developers"
__license__ = "GNU Affero General Public License v3.0"

from time import perf_counter, sleep
from .constants import APP_NAME, TIMER_FREQ, TIMER_INTERVAL, DEFAULT_CLOCK_SPEED, MAX_BACKLOG
from .inputs.i_null import CMD_TOGGLE_PAUSE, CMD_STEP

DUE_EPSILON = 1e-9  # Absorbs float drift from repeatedly subtracting intervals like 1/60


class SchedulerError(Exception):
    pass


class Scheduler:
    def __init__(self, machine, renderer, inputs, audio, clock_speed=DEFAULT_CLOCK_SPEED, paused=False):
        if clock_speed is None:
            clock_speed = DEFAULT_CLOCK_SPEED

        if clock_speed <= 0:
            raise SchedulerError("Clock speed must be at least one instruction per second")

        self.machine = machine
        self.renderer = renderer
        self.inputs = inputs
        self.audio = audio
        self.clock_speed = clock_speed
        self.core_interval = 1.0 / clock_speed
        self.core_accumulator = 0.0
        self.timer_accumulator = 0.0
        self.paused = paused
        self.buzzer_enabled = False
        self.vid_size = None

        # Performance-related vars
        self.frames = 0
        self.perf_counter_fps = 0
        self.perf_ops_base = 0
        self.report_perf()

    def pause(self):
        self.paused = True
        self.core_accumulator = 0.0

    def resume(self):
        self.paused = False

    def single_step(self):
        # Only meaningful while paused, but harmless otherwise
        self.machine.step()
        self._render()

    def advance(self, elapsed):
        # Pay out every instruction and 60Hz frame owed for 'elapsed' seconds.  Returns True if a quit was requested.
        elapsed = min(max(elapsed, 0.0), MAX_BACKLOG)
        self.timer_accumulator += elapsed

        if not self.paused:
            self.core_accumulator += elapsed

        core_interval = self.core_interval

        while True:
            core_due = self.core_accumulator + DUE_EPSILON >= core_interval
            timer_due = self.timer_accumulator + DUE_EPSILON >= TIMER_INTERVAL

            if not (core_due or timer_due):
                return False

            # Whichever event has the most time left over after it happened first
            if timer_due and (
                not core_due or self.timer_accumulator - TIMER_INTERVAL >= self.core_accumulator - core_interval
            ):
                self.timer_accumulator -= TIMER_INTERVAL

                if self._frame():
                    return True
            else:
                self.core_accumulator -= core_interval
                self.machine.step()

    def time_until_next_event(self):
        waits = [TIMER_INTERVAL - self.timer_accumulator]

        if not self.paused:
            waits.append(self.core_interval - self.core_accumulator)

        return max(0.0, min(waits))

    def run(self):
        last_time = perf_counter()

        while True:
            this_time = perf_counter()

            if self.advance(this_time - last_time):
                return

            last_time = this_time
            wait = self.time_until_next_event()

            if wait > 0.001:
                # Give the rest of the host some time, but wake a little early to stay precise
                sleep(wait - 0.001)

    def _frame(self):
        # Process inputs at 60Hz, before anything else in the frame, so the CPU sees them on its next step
        if self.inputs.process_messages(self.machine.keypad):
            return True

        for command in self.inputs.take_commands():
            self._host_command(command)

        self.machine.tick_timers()
        self._update_buzzer()
        self._render()
        self.frames += 1

        if self.frames % int(TIMER_FREQ) == 0:
            self.report_perf(self.perf_counter_fps, self.machine.cpu.ops_executed - self.perf_ops_base)
            self.perf_counter_fps = 0
            self.perf_ops_base = self.machine.cpu.ops_executed

        return False

    def _host_command(self, command):
        if command == CMD_TOGGLE_PAUSE:
            if self.paused:
                self.resume()
            else:
                self.pause()
        elif command == CMD_STEP and self.paused:
            self.single_step()

    def _update_buzzer(self):
        sound_active = self.machine.sound_active()

        if sound_active != self.buzzer_enabled:
            self.audio.enable_buzzer(sound_active)
            self.buzzer_enabled = sound_active

    def _render(self):
        framebuffer = self.machine.framebuffer

        if not framebuffer.consume_dirty():
            return

        vid_size = framebuffer.get_vid_size()

        if vid_size != self.vid_size:
            self.renderer.set_resolution(*vid_size)
            self.vid_size = vid_size

        self.renderer.draw(framebuffer.snapshot())
        self.renderer.refresh_display()
        self.perf_counter_fps += 1

    def report_perf(self, fps=0, ops=0):
        title = "{} - {} FPS, {} OPS".format(APP_NAME, fps, ops)
        self.renderer.set_title(title)
