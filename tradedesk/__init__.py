"""Trading desk utilities: session clock, position sizer, and checklist."""

__version__ = "0.1.0"
