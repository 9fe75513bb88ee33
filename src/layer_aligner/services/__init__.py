"""Layer Aligner services: layout, image import, reference wizard and alignment."""
