"""Text helpers: markdown chunking, language heuristics, speech text cleanup"""
