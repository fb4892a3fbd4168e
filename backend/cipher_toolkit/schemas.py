from pydantic import BaseModel
from typing import List, Optional

class CipherRequest(BaseModel):
    algorithm: str
    text: str
    # Key fields, each algorithm reads the ones it needs
    shift: Optional[int] = None
    key_a: Optional[int] = None
    key_b: Optional[int] = None
    key: Optional[str] = None
    key2: Optional[str] = None
    rails: Optional[int] = None
    rows: Optional[int] = None
    cols: Optional[int] = None
    matrix: Optional[List[List[int]]] = None # 2x2
    mask: Optional[str] = None # lines of 0/1

    def key_params(self) -> dict:
        return self.model_dump(exclude={"algorithm", "text", "encrypt"}, exclude_none=True)

class TransformRequest(CipherRequest):
    encrypt: bool = True

class TransformResponse(BaseModel):
    algorithm: str
    encrypt: bool
    result: str
    steps: List[str]

class AlgorithmInfo(BaseModel):
    id: str
    name: str
    description: str
    category: str
    subcategory: str
    params: List[str]
    reciprocal: bool
