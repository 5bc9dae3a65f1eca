"""Process wiring shared by the API, the proof worker and the scripts."""
