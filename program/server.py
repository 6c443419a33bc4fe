from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import List, Optional

from mips.config import DEFAULT_REGISTER_POOL, TranslatorConfig
from mips.errors import TranslationError
from mips.integrated_mips_generator import IntegratedMIPSGenerator

app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class TranslateRequest(BaseModel):
    code: str                                   # TAC program, one instruction per line
    register_pool: Optional[List[str]] = None   # opcional: pool de registros
    annotate: bool = True                       # comentar cada instrucción con su línea TAC
    emit_exit: bool = True                      # terminar con la syscall de salida
    strict_labels: bool = False                 # fallar ante etiquetas no definidas


class Statistics(BaseModel):
    instructions: int
    labels: int
    symbols: int
    literals: int
    registers_used: int
    register_pool_exhausted: bool
    undefined_labels: List[str] = []


class TranslateResponse(BaseModel):
    ok: bool
    assembly: Optional[str] = None
    diagnostics: List[str] = []
    statistics: Optional[Statistics] = None


def build_config(req: TranslateRequest) -> TranslatorConfig:
    pool = tuple(req.register_pool) if req.register_pool else DEFAULT_REGISTER_POOL
    return TranslatorConfig(
        register_pool=pool,
        annotate=req.annotate,
        emit_exit=req.emit_exit,
        strict_labels=req.strict_labels,
    )


@app.post("/translate", response_model=TranslateResponse)
def translate(req: TranslateRequest):
    try:
        config = build_config(req)
    except (TranslationError, ValueError) as e:
        raise HTTPException(status_code=422, detail=str(e))

    generator = IntegratedMIPSGenerator(config)
    try:
        assembly = generator.generate_from_tac_lines(req.code.splitlines())
    except TranslationError as e:
        return TranslateResponse(ok=False, diagnostics=generator.diagnostics + [str(e)])

    return TranslateResponse(
        ok=True,
        assembly=assembly,
        diagnostics=generator.diagnostics,
        statistics=Statistics(**generator.get_statistics()),
    )
