"""Reading and writing of recordings, stored metrics and analysis results."""
