"""Settings routes for the optional remote API credential."""

import schemas
from dependencies import get_credential_store
from fastapi import APIRouter, Depends
from infrastructure import CredentialStore

router = APIRouter()


@router.get("/credential", response_model=schemas.CredentialStatus)
async def get_credential_status(credentials: CredentialStore = Depends(get_credential_store)):
    """Report whether a key is configured. The key itself is never returned."""
    return schemas.CredentialStatus(configured=credentials.is_configured)


@router.put("/credential", response_model=schemas.CredentialStatus)
async def save_credential(
    update: schemas.CredentialUpdate, credentials: CredentialStore = Depends(get_credential_store)
):
    """Save the API key; an empty key removes it and switches back to mock replies."""
    await credentials.save(update.api_key)
    return schemas.CredentialStatus(configured=credentials.is_configured)


@router.delete("/credential", response_model=schemas.CredentialStatus)
async def delete_credential(credentials: CredentialStore = Depends(get_credential_store)):
    await credentials.clear()
    return schemas.CredentialStatus(configured=credentials.is_configured)
