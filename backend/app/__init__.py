"""HTTP surface for the packing list parser."""
