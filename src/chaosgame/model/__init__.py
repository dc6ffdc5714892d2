"""
The MODEL layer contains pure data structures and file formats.
It has NO knowledge of the iteration loop or the command line.
It deals with Configuration, Geometry primitives, and I/O.
"""
