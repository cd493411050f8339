"""Tools for editing Yamaha XG and QS300 parameters: RPN/NRPN decoding, SysEx files, settings and session state."""

__version__ = "0.9.0"
__all__ = ["midirpn", "options", "session", "sysexfile", "parts"]