"""QMSREC command line interface."""
