"""Main window mixins for LayerAlignerWindow"""
