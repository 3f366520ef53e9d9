"""Command line front end for the stats card renderer."""
