"""Client side of personal secrets: encryption happens here, never on the server."""
