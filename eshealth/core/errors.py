class ProbeCancelled(Exception):
    """The cancel signal fired before the remote call completed."""
