"""
Client-side interview simulator: state machine, speech transcript buffer,
static question bank and the HTTP client for the interview endpoints.
"""
