from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from tenant_service.core.database import get_db
from tenant_service.core.deps import require_tenant_member
from tenant_service.schemas import PreferencesIn, PreferencesOut
from tenant_service.services import preferences_service


router = APIRouter(dependencies=[Depends(require_tenant_member)])


@router.post("", response_model=PreferencesOut)
def save_preferences(tenant_id: str, data: PreferencesIn, db: Session = Depends(get_db)):
    return preferences_service.save_preferences(db, tenant_id, data)


@router.get("", response_model=PreferencesOut)
def get_preferences(tenant_id: str, db: Session = Depends(get_db)):
    return preferences_service.get_preferences(db, tenant_id)


@router.put("", response_model=PreferencesOut)
def update_preferences(tenant_id: str, data: PreferencesIn, db: Session = Depends(get_db)):
    return preferences_service.update_preferences(db, tenant_id, data)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def delete_preferences(tenant_id: str, db: Session = Depends(get_db)):
    preferences_service.delete_preferences(db, tenant_id)


@router.get("/volume/range", response_model=List[PreferencesOut])
def preferences_by_volume_range(min_volume: int, max_volume: int, db: Session = Depends(get_db)):
    return preferences_service.list_by_volume_range(db, min_volume, max_volume)


@router.get("/volume/{volume}", response_model=List[PreferencesOut])
def preferences_by_volume(volume: int, db: Session = Depends(get_db)):
    return preferences_service.list_by_volume(db, volume)


@router.get("/count/volume/range", response_model=int)
def count_by_volume_range(min_volume: int, max_volume: int, db: Session = Depends(get_db)):
    return preferences_service.count_by_volume_range(db, min_volume, max_volume)


@router.get("/count/volume/{volume}", response_model=int)
def count_by_volume(volume: int, db: Session = Depends(get_db)):
    return preferences_service.count_by_volume(db, volume)


@router.get("/exists", response_model=bool)
def preferences_exist(tenant_id: str, db: Session = Depends(get_db)):
    return preferences_service.preferences_exist(db, tenant_id)


@router.get("/playback-settings", response_model=List[PreferencesOut])
def preferences_by_playback_setting(setting: str, db: Session = Depends(get_db)):
    return preferences_service.list_by_playback_setting(db, setting)


@router.get("/genre-preferences", response_model=List[PreferencesOut])
def preferences_by_genre(genre: str, db: Session = Depends(get_db)):
    return preferences_service.list_by_genre(db, genre)


@router.get("/ad-rules", response_model=List[PreferencesOut])
def preferences_by_ad_rule(rule: str, db: Session = Depends(get_db)):
    return preferences_service.list_by_ad_rule(db, rule)
