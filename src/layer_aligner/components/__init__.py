"""Layer Aligner UI components"""
