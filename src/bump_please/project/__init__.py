"""Project manifest handling."""
