"""
Pot routes - Smart plant pots bound on this device
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from smartflora.dependencies import get_current_session, get_device_registry
from smartflora.device_registry import DeviceRegistry
from smartflora.errors import AlreadyBound, NotFound, TransientFailure
from smartflora.models import (
    HistoryKind,
    HistoryPoint,
    Pot,
    PotBinding,
    PotImageUpdate,
    PotNameUpdate,
    PotSettings,
)

router = APIRouter(
    prefix="/pots",
    tags=["Pots"],
    dependencies=[Depends(get_current_session)],
)


def _not_found(e: NotFound) -> HTTPException:
    return HTTPException(status_code=404, detail=str(e))


def _unavailable(e: TransientFailure) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=str(e),
    )


@router.get("", response_model=List[Pot])
async def list_pots(
    registry: DeviceRegistry = Depends(get_device_registry),
) -> List[Pot]:
    """List bound pots in registration order."""
    try:
        return await registry.list_pots()
    except TransientFailure as e:
        raise _unavailable(e)


@router.post("", response_model=Pot, status_code=201)
async def bind_pot(
    binding: PotBinding,
    registry: DeviceRegistry = Depends(get_device_registry),
) -> Pot:
    """
    Bind a new pot.

    Creates the pot with default settings and a baseline history.
    """
    try:
        return await registry.bind_pot(binding)
    except AlreadyBound as e:
        raise HTTPException(status_code=409, detail=str(e))
    except TransientFailure as e:
        raise _unavailable(e)


@router.get("/{pot_id}", response_model=Pot)
async def get_pot(
    pot_id: str,
    registry: DeviceRegistry = Depends(get_device_registry),
) -> Pot:
    """Fetch a single pot with its telemetry and settings."""
    try:
        pot = await registry.get_pot(pot_id)
    except TransientFailure as e:
        raise _unavailable(e)

    if pot is None:
        raise HTTPException(status_code=404, detail=f"Pot '{pot_id}' not found")

    return pot


@router.get("/{pot_id}/history", response_model=List[HistoryPoint])
async def get_history(
    pot_id: str,
    kind: HistoryKind = HistoryKind.MOISTURE,
    registry: DeviceRegistry = Depends(get_device_registry),
) -> List[HistoryPoint]:
    """Soil moisture or temperature history of a pot, oldest first."""
    try:
        return await registry.get_history(pot_id, kind)
    except NotFound as e:
        raise _not_found(e)
    except TransientFailure as e:
        raise _unavailable(e)


@router.put("/{pot_id}/settings", response_model=Pot)
async def update_settings(
    pot_id: str,
    settings: PotSettings,
    registry: DeviceRegistry = Depends(get_device_registry),
) -> Pot:
    """
    Replace the settings of a pot.

    The body must be a complete settings object; it is not merged with the
    previous settings.
    """
    try:
        return await registry.update_settings(pot_id, settings)
    except NotFound as e:
        raise _not_found(e)
    except TransientFailure as e:
        raise _unavailable(e)


@router.patch("/{pot_id}/name", response_model=Pot)
async def update_name(
    pot_id: str,
    update: PotNameUpdate,
    registry: DeviceRegistry = Depends(get_device_registry),
) -> Pot:
    try:
        return await registry.update_name(pot_id, update.name)
    except NotFound as e:
        raise _not_found(e)
    except TransientFailure as e:
        raise _unavailable(e)


@router.put("/{pot_id}/image", response_model=Pot)
async def update_image(
    pot_id: str,
    update: PotImageUpdate,
    registry: DeviceRegistry = Depends(get_device_registry),
) -> Pot:
    try:
        return await registry.update_image(pot_id, update.image)
    except NotFound as e:
        raise _not_found(e)
    except TransientFailure as e:
        raise _unavailable(e)


@router.delete("/{pot_id}", status_code=204)
async def unbind_pot(
    pot_id: str,
    registry: DeviceRegistry = Depends(get_device_registry),
) -> Response:
    """
    Unbind a pot.

    Unbinding an unknown pot succeeds without changes so clients can retry.
    """
    try:
        await registry.unbind_pot(pot_id)
    except TransientFailure as e:
        raise _unavailable(e)

    return Response(status_code=204)
