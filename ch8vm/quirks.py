#!/usr/bin/env python3

"""
CPU Quirks

Interpreters from different eras disagree on what a handful of opcodes do, and
ROMs were written against one behaviour or the other.  Rather than guess,
every disputed behaviour is a named switch here.

Quirks
------

- Shift quirks          : 8xy6/8xyE shift Vx in place.  Off: Vy is shifted into Vx (COSMAC VIP).
- Shift flag quirks     : 8xy6/8xyE write Vf before the result, so 'SHR Vf' keeps the result.  Off: flag wins.
- Load quirks           : Fx55/Fx65 advance I past the registers transferred.  On by default.
- Index increment quirks: With load quirks, I advances by x rather than x + 1 (CHIP-48).
- Index overflow quirks : Fx1E sets Vf when I passes 0xFFF (Amiga interpreter).
- Jump quirks           : Bnnn jumps to nnn + Vx, x being the top nibble of nnn (CHIP-48 / Super-CHIP).
- Logic quirks          : 8xy1/8xy2/8xy3 reset Vf (COSMAC VIP).
- Clip quirks           : Sprites are clipped at the screen edge instead of wrapping.  The origin still wraps.
"""

__copyright__ = "Copyright (C) 2024 Chippy8 Developers"
__license__ = "GNU Affero General Public License v3.0"

from .constants import CPU_QUIRKS

QUIRK_DEFAULTS = {
    "shift": False,
    "shift_flag": False,
    "load": True,
    "index_increment": False,
    "index_overflow": False,
    "jump": False,
    "logic": False,
    "clip": False
}


class QuirksError(Exception):
    pass


class Quirks:
    def __init__(self, **settings):
        for name in CPU_QUIRKS:
            setattr(self, name, QUIRK_DEFAULTS[name])

        self.update(**settings)

    def update(self, **settings):
        for name, value in settings.items():
            if name not in QUIRK_DEFAULTS:
                raise QuirksError("Unknown quirk '{}'".format(name))

            # None means 'leave the default alone', which is how unset command line options arrive
            if value is not None:
                setattr(self, name, bool(value))

    @classmethod
    def from_args(cls, args):
        # Pick up any '<name>_quirks' options, e.g. from the command line
        return cls(**{name: args.get("{}_quirks".format(name)) for name in CPU_QUIRKS})

    def as_dict(self):
        return {name: getattr(self, name) for name in CPU_QUIRKS}

    def __eq__(self, other):
        return isinstance(other, Quirks) and self.as_dict() == other.as_dict()

    def __repr__(self):
        return "Quirks({})".format(", ".join("{}={}".format(k, v) for k, v in self.as_dict().items()))
