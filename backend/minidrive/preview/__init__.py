"""HTML preview rendering for the index page."""
