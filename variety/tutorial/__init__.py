"""
Walk-throughs which print their lessons to the console, one topic per module.
Each module has a `main()` that takes no arguments.
"""
