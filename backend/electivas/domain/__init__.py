"""Voting, commenting and moderation core."""
