"""Picker state: markers, merging, drag handling and notifications."""
