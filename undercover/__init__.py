"""Undercover - a pass-the-device party game of secret topics and one imposter."""
