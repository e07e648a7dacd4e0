from fastapi import APIRouter

from app.api.v1.endpoints import book, brute_force, decrypt, encrypt, keys, languages

api_router = APIRouter()

api_router.include_router(
    languages.router,
    prefix="/languages",
    tags=["Languages"],
)

api_router.include_router(
    encrypt.router,
    prefix="/encrypt",
    tags=["Encryption"],
)

api_router.include_router(
    decrypt.router,
    prefix="/decrypt",
    tags=["Decryption"],
)

api_router.include_router(
    keys.router,
    prefix="/keys",
    tags=["Keys"],
)

api_router.include_router(
    book.router,
    prefix="/book",
    tags=["Book Cipher"],
)

api_router.include_router(
    brute_force.router,
    prefix="/brute-force",
    tags=["Cryptanalysis"],
)
