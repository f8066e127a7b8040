"""Command line, rendering and GUI front ends."""
