import os
import sys
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

# Add project root to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from exprtree.builder import build_tree
from exprtree.calculator import format_result
from exprtree.config import CalculatorConfig
from exprtree.errors import ExpressionError
from exprtree.evaluator import evaluate
from exprtree.operators import operator_table
from exprtree.postfix import to_postfix
from exprtree.tokenizer import tokenize

VIEWER_DIR = os.path.dirname(os.path.abspath(__file__))

app = FastAPI()
config = CalculatorConfig()


class EvaluateRequest(BaseModel):
    expression: str


class EvaluateResponse(BaseModel):
    expression: str
    result: Optional[float]   # None when the result is inf/nan, which JSON cannot carry
    formatted: str
    tokens: List[str]
    postfix: List[str]
    in_order: str
    pre_order: str
    post_order: str
    tree: str


class OperatorInfo(BaseModel):
    name: str
    symbol: str
    arity: int
    precedence: int
    associativity: str


@app.post("/evaluate", response_model=EvaluateResponse)
async def evaluate_endpoint(request: EvaluateRequest) -> EvaluateResponse:
    expression = request.expression.strip()
    if not expression:
        raise HTTPException(status_code=400, detail="Empty expression")

    try:
        tokens = tokenize(expression)
        postfix = to_postfix(tokens)
        tree = build_tree(postfix)
        value = evaluate(tree)
    except ExpressionError as e:
        raise HTTPException(status_code=400, detail=str(e))

    finite = value == value and value not in (float('inf'), float('-inf'))
    return EvaluateResponse(
        expression=expression,
        result=value if finite else None,
        formatted=format_result(value, config),
        tokens=[str(t) for t in tokens],
        postfix=[str(t) for t in postfix],
        in_order=tree.in_order(),
        pre_order=tree.pre_order(),
        post_order=tree.post_order(),
        tree=tree.display(),
    )


@app.get("/operators", response_model=List[OperatorInfo])
async def get_operators() -> List[Dict]:
    return operator_table()


# Also serve static files
app.mount("/static", StaticFiles(directory=VIEWER_DIR), name="static")


@app.get("/")
async def read_index():
    return FileResponse(os.path.join(VIEWER_DIR, "index.html"))
