from gridgeo.transformers.national_grid import (
    NationalGridTransformer,
    grid_to_geographic,
)
from gridgeo.transformers.proj import ProjTransformer
from gridgeo.transformers.transformer_interface import TransformerInterface

__all__ = [
    "NationalGridTransformer",
    "ProjTransformer",
    "TransformerInterface",
    "grid_to_geographic",
]
