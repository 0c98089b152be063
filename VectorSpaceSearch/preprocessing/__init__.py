"""
Preprocessing module for text processing in vector-space search.
Includes alphabetic tokenization, lowercase conversion and stop word filtering.
"""
