# util/types.py
from typing import List, Literal, Sequence, TypedDict, Union

import numpy as np


# Anything the similarity primitive accepts as a vector.
VectorLike = Union[Sequence[float], np.ndarray]

RequirementCategory = Literal["skills", "certifications"]


class MissingRequirementDict(TypedDict):
    category: RequirementCategory
    items: List[str]
