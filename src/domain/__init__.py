"""Domain layer - pure session lifecycle logic.

Structure:
- entities/: Session entity (mutable, has identity)
- value_objects/: DeviceInfo, GeoLocation, SessionPolicy, SessionPrincipal
- enums/: Session states, invalid reasons, revocation reasons, store failure kinds
- protocols/: Ports (session store, notifier, geolocation, logger)
- validators/: Caller-contract checks

No framework or infrastructure dependencies.
"""
