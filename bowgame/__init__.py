"""Bow target-shooting simulation with a pygame front end."""
