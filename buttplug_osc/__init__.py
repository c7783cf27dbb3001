"""Bridge OSC messages to buttplug.io devices."""
