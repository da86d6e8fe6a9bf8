"""HTTP and WebSocket driver for game sessions."""
