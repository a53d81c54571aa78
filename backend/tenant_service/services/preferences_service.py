import logging

from sqlalchemy import String, cast
from sqlalchemy.orm import Session

from tenant_service.core.errors import TenantNotFoundError, TenantValidationError
from tenant_service.models.tenant import Tenant
from tenant_service.models.tenant_preferences import DEFAULT_VOLUME, TenantPreferences
from tenant_service.schemas import PreferencesIn, PreferencesOut


logger = logging.getLogger(__name__)

MIN_VOLUME = 0
MAX_VOLUME = 100


def _to_out(prefs: TenantPreferences) -> PreferencesOut:
    return PreferencesOut.model_validate(prefs)


def _validate(data: PreferencesIn) -> None:
    if data.volume_default is not None and not MIN_VOLUME <= data.volume_default <= MAX_VOLUME:
        raise TenantValidationError(f"Volume default must be between {MIN_VOLUME} and {MAX_VOLUME}")


def _apply(prefs: TenantPreferences, data: PreferencesIn) -> None:
    if data.playback_settings is not None:
        prefs.playback_settings = data.playback_settings
    if data.genre_preferences is not None:
        prefs.genre_preferences = data.genre_preferences
    if data.ad_rules is not None:
        prefs.ad_rules = data.ad_rules
    if data.volume_default is not None:
        prefs.volume_default = data.volume_default


def _find(db: Session, tenant_id: str):
    return db.query(TenantPreferences).filter(TenantPreferences.tenant_id == tenant_id).first()


def _get_entity(db: Session, tenant_id: str) -> TenantPreferences:
    prefs = _find(db, tenant_id)
    if not prefs:
        raise TenantNotFoundError(f"Preferences not found for tenant: {tenant_id}")
    return prefs


def save_preferences(db: Session, tenant_id: str, data: PreferencesIn) -> PreferencesOut:
    """Create the tenant's preferences, or update them in place when they already exist."""
    logger.info("Saving preferences for tenant: %s", tenant_id)
    if db.query(Tenant.id).filter(Tenant.id == tenant_id).first() is None:
        raise TenantNotFoundError(f"Tenant not found with ID: {tenant_id}")
    _validate(data)

    prefs = _find(db, tenant_id)
    if prefs is None:
        prefs = TenantPreferences(
            tenant_id=tenant_id,
            playback_settings={},
            genre_preferences=[],
            ad_rules={},
            volume_default=DEFAULT_VOLUME,
        )
        db.add(prefs)
    _apply(prefs, data)

    db.commit()
    db.refresh(prefs)
    logger.info("Saved preferences for tenant: %s", tenant_id)
    return _to_out(prefs)


def get_preferences(db: Session, tenant_id: str) -> PreferencesOut:
    return _to_out(_get_entity(db, tenant_id))


def update_preferences(db: Session, tenant_id: str, data: PreferencesIn) -> PreferencesOut:
    logger.info("Updating preferences for tenant: %s", tenant_id)
    prefs = _get_entity(db, tenant_id)
    _validate(data)
    _apply(prefs, data)
    db.commit()
    db.refresh(prefs)
    return _to_out(prefs)


def delete_preferences(db: Session, tenant_id: str) -> None:
    logger.info("Deleting preferences for tenant: %s", tenant_id)
    prefs = _get_entity(db, tenant_id)
    db.delete(prefs)
    db.commit()


def _by_volume_query(db: Session, volume: int):
    return db.query(TenantPreferences).filter(TenantPreferences.volume_default == volume)


def _volume_range_query(db: Session, min_volume: int, max_volume: int):
    if min_volume > max_volume:
        raise TenantValidationError("Minimum volume cannot be greater than maximum volume")
    return db.query(TenantPreferences).filter(
        TenantPreferences.volume_default >= min_volume,
        TenantPreferences.volume_default <= max_volume,
    )


def list_by_volume(db: Session, volume: int) -> list[PreferencesOut]:
    return [_to_out(p) for p in _by_volume_query(db, volume).all()]


def list_by_volume_range(db: Session, min_volume: int, max_volume: int) -> list[PreferencesOut]:
    query = _volume_range_query(db, min_volume, max_volume).order_by(TenantPreferences.volume_default)
    return [_to_out(p) for p in query.all()]


def count_by_volume(db: Session, volume: int) -> int:
    return _by_volume_query(db, volume).count()


def count_by_volume_range(db: Session, min_volume: int, max_volume: int) -> int:
    return _volume_range_query(db, min_volume, max_volume).count()


def preferences_exist(db: Session, tenant_id: str) -> bool:
    return _find(db, tenant_id) is not None


def _search_term(value: str, label: str) -> str:
    term = (value or "").strip()
    if not term:
        raise TenantValidationError(f"{label} cannot be empty")
    return term


def _json_contains(db: Session, column, term: str) -> list[PreferencesOut]:
    # Matches against the serialized JSON text, keys included
    query = db.query(TenantPreferences).filter(cast(column, String).contains(term, autoescape=True))
    return [_to_out(p) for p in query.order_by(TenantPreferences.created_at).all()]


def list_by_playback_setting(db: Session, setting: str) -> list[PreferencesOut]:
    term = _search_term(setting, "Playback setting")
    return _json_contains(db, TenantPreferences.playback_settings, term)


def list_by_genre(db: Session, genre: str) -> list[PreferencesOut]:
    term = _search_term(genre, "Genre")
    return _json_contains(db, TenantPreferences.genre_preferences, term)


def list_by_ad_rule(db: Session, rule: str) -> list[PreferencesOut]:
    term = _search_term(rule, "Ad rule")
    return _json_contains(db, TenantPreferences.ad_rules, term)
