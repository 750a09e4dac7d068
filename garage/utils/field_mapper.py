# garage/utils/field_mapper.py
"""
snake_case (database columns) <-> camelCase (API/domain fields) mapping.

One FieldMap per entity. Rules:
  - every column maps 1:1 to a domain field (mechanical camelCase unless renamed)
  - to_storage() only emits keys the caller actually sent — omitted means
    "leave alone", None means "clear this column"
  - values pass through untouched; parsing form strings is the caller's job
"""

from typing import Any, Iterable, Mapping, Optional


def snake_to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(word[:1].upper() + word[1:] for word in rest)


class FieldMap:
    def __init__(self, columns: Iterable[str], renames: Optional[Mapping[str, str]] = None):
        renames = dict(renames or {})
        self.columns = tuple(columns)
        unknown = set(renames) - set(self.columns)
        if unknown:
            raise ValueError(f"Renamed columns not in column list: {sorted(unknown)}")
        self._to_field = {c: renames.get(c, snake_to_camel(c)) for c in self.columns}
        self._to_column = {f: c for c, f in self._to_field.items()}
        if len(self._to_column) != len(self._to_field):
            raise ValueError("Column -> field mapping is not one-to-one")

    @property
    def fields(self) -> tuple:
        return tuple(self._to_field[c] for c in self.columns)

    def domain_field(self, column: str) -> str:
        return self._to_field[column]

    def column(self, field: str) -> str:
        return self._to_column[field]

    def to_domain(self, row: Any) -> dict:
        """Database row (mapping or ORM instance) -> camelCase dict."""
        if isinstance(row, Mapping):
            return {self._to_field[c]: row[c] for c in self.columns if c in row}
        return {self._to_field[c]: getattr(row, c) for c in self.columns}

    def to_storage(self, partial: Mapping[str, Any], exclude: Iterable[str] = ()) -> dict:
        """camelCase partial -> snake_case payload. Unknown and excluded fields are dropped."""
        skip = set(exclude)
        return {
            self._to_column[f]: value
            for f, value in partial.items()
            if f in self._to_column and f not in skip
        }


def apply_storage(instance: Any, payload: Mapping[str, Any]) -> list:
    """Set snake_case payload values on an ORM instance. Returns the columns that changed."""
    changed = []
    for column, value in payload.items():
        if getattr(instance, column) != value:
            setattr(instance, column, value)
            changed.append(column)
    return changed


USER_FIELDS = FieldMap([
    "id", "user_uid", "garage_uid", "garage_id", "first_name", "last_name",
    "garage_name", "user_role", "login_id", "email", "alternate_email",
    "phone_number", "alternate_phone", "address", "city", "state", "zip_code",
    "country", "date_of_birth", "blood_group", "employee_id", "department",
    "date_of_joining", "emergency_contact_name", "emergency_contact_phone",
    "emergency_contact_relation", "id_proof_type", "id_proof_number",
    "profile_picture", "is_active", "created_at", "updated_at",
])

GARAGE_AUTH_FIELDS = FieldMap([
    "user_uid", "garage_id", "garage_name", "first_name", "last_name",
    "login_id", "user_role", "created_at", "updated_at",
])

GARAGE_FIELDS = FieldMap([
    "garage_id", "owner_id", "garage_name", "email", "phone_number",
    "alternate_phone_number", "whatsapp_number", "address", "city", "state",
    "zip_code", "country", "gstin", "business_registration_number",
    "business_type", "year_established", "website", "pan_number",
    "service_types", "vehicle_types_serviced", "number_of_service_bays",
    "certifications", "insurance_details", "payment_methods", "bank_name",
    "account_number", "ifsc_code", "branch", "default_labor_rate",
    "invoice_prefix", "parking_capacity", "waiting_area_amenities",
    "tow_service_available", "pickup_drop_service_available",
    "operating_hours", "tax_rate", "currency", "billing_cycle",
    "credit_terms", "notes", "created_at", "updated_at",
])

CUSTOMER_FIELDS = FieldMap([
    "id", "garage_id", "first_name", "last_name", "email", "phone_number",
    "alternate_phone", "address", "city", "state", "zip_code", "country",
    "notes", "status", "customer_since", "created_at", "updated_at",
])

VEHICLE_FIELDS = FieldMap([
    "id", "customer_id", "garage_id", "make", "model", "year",
    "license_plate", "color", "vin", "engine_number", "chassis_number",
    "category", "current_mileage", "last_service_date", "status", "notes",
    "created_at", "updated_at",
])

PART_FIELDS = FieldMap([
    "id", "garage_id", "part_number", "part_name", "category", "make",
    "model", "used_for", "description", "on_hand_stock", "warehouse_stock",
    "low_stock_threshold", "stock_status", "purchase_price", "selling_price",
    "wholesale_price", "core_charge", "profit_margin_pct", "sku",
    "oem_part_number", "is_universal_fitment", "supplier", "supplier_phone",
    "supplier_email", "supplier_website", "vendor_sku", "lead_time_days",
    "minimum_order_quantity", "location", "batch_number", "expiration_date",
    "warranty_months", "country_of_origin", "created_at", "updated_at",
], renames={"stock_status": "status", "profit_margin_pct": "margin"})

MOTORCYCLE_FIELDS = FieldMap([
    "id", "make", "model", "year_start", "year_end", "country_of_origin",
    "category", "engine_displacement_cc", "production_status", "logo_url",
    "created_at", "updated_at",
])
