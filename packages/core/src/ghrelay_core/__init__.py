"""Core pipeline for ghrelay: GitHub Discussion comments relayed to Slack."""
