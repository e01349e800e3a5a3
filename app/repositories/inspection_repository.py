"""
Inspection Repository - Rice Inspection Grading API
app/repositories/inspection_repository.py

Data access layer for inspection documents.

Table: INSPECTIONS
    INSPECTION_ID   VARCHAR(32) PRIMARY KEY   -- generated, distinct from storage identity
    NAME            VARCHAR(255) NOT NULL
    STANDARD_ID     NUMBER
    STANDARD_NAME   VARCHAR(255) NOT NULL
    STANDARD_DATA   VARIANT                   -- scored criteria, frozen at creation
    TOTAL_SAMPLE    NUMBER
    DEFECT_RICE     VARIANT
    NOTE            VARCHAR(2000)
    PRICE           FLOAT
    SAMPLING_POINT  VARIANT
    SAMPLING_DATE   TIMESTAMP_TZ
    IMAGE_LINK      VARCHAR(1000)
    CREATE_DATE     TIMESTAMP_TZ NOT NULL
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from app.repositories.base import BaseRepository

CREATE_TABLE_SQL = """
    CREATE TABLE IF NOT EXISTS INSPECTIONS (
        INSPECTION_ID   VARCHAR(32) PRIMARY KEY,
        NAME            VARCHAR(255) NOT NULL,
        STANDARD_ID     NUMBER,
        STANDARD_NAME   VARCHAR(255) NOT NULL,
        STANDARD_DATA   VARIANT,
        TOTAL_SAMPLE    NUMBER,
        DEFECT_RICE     VARIANT,
        NOTE            VARCHAR(2000),
        PRICE           FLOAT,
        SAMPLING_POINT  VARIANT,
        SAMPLING_DATE   TIMESTAMP_TZ,
        IMAGE_LINK      VARCHAR(1000),
        CREATE_DATE     TIMESTAMP_TZ NOT NULL
    )
"""

_SELECT_COLUMNS = """
    INSPECTION_ID, NAME, STANDARD_ID, STANDARD_NAME, STANDARD_DATA,
    TOTAL_SAMPLE, DEFECT_RICE, NOTE, PRICE, SAMPLING_POINT,
    SAMPLING_DATE, IMAGE_LINK, CREATE_DATE
"""


class InspectionRepository(BaseRepository):
    """Repository for inspection documents (create, read, list, batch delete)."""

    TABLE_NAME = "INSPECTIONS"

    def create_table(self) -> None:
        """Create the INSPECTIONS table if it does not exist."""
        self.execute_query(CREATE_TABLE_SQL, commit=True)

    def create(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert a new inspection document.

        Args:
            document: Inspection fields keyed as in _row_to_dict()

        Returns:
            The stored inspection dict
        """
        # PARSE_JSON is not allowed in a VALUES clause, hence INSERT ... SELECT
        sql = """
            INSERT INTO INSPECTIONS (INSPECTION_ID, NAME, STANDARD_ID, STANDARD_NAME,
                                     STANDARD_DATA, TOTAL_SAMPLE, DEFECT_RICE, NOTE,
                                     PRICE, SAMPLING_POINT, SAMPLING_DATE, IMAGE_LINK,
                                     CREATE_DATE)
            SELECT %s, %s, %s, %s, PARSE_JSON(%s), %s, PARSE_JSON(%s), %s,
                   %s, PARSE_JSON(%s), %s, %s, %s
        """
        params = (
            document["inspection_id"],
            document["name"],
            document.get("standard_id"),
            document["standard_name"],
            self.to_variant(document.get("standard_data", [])),
            document.get("total_sample", 0),
            self.to_variant(document.get("defect_rice", [])),
            document.get("note"),
            document.get("price"),
            self.to_variant(document.get("sampling_point", [])),
            document.get("sampling_date"),
            document.get("image_link"),
            document["create_date"],
        )

        self.execute_query(sql, params, commit=True)

        return document

    def get_by_inspection_id(self, inspection_id: str) -> Optional[Dict[str, Any]]:
        """
        Retrieve an inspection by inspectionID.

        Returns:
            Inspection dict or None if not found
        """
        sql = f"SELECT {_SELECT_COLUMNS} FROM INSPECTIONS WHERE INSPECTION_ID = %s"
        row = self.execute_query(sql, (inspection_id,), fetch_one=True)

        if not row:
            return None

        return self._row_to_dict(row)

    def get_all(
        self,
        page: int = 1,
        page_size: int = 10,
        inspection_id: Optional[str] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ) -> Tuple[List[Dict[str, Any]], int]:
        """
        Retrieve a page of inspections with optional filters.

        Args:
            page: Page number (1-indexed)
            page_size: Number of items per page
            inspection_id: Exact inspectionID filter
            date_from: Inclusive createDate lower bound (applied with date_to)
            date_to: Inclusive createDate upper bound (applied with date_from)

        Returns:
            Tuple of (list of inspection dicts, total count)
        """
        offset = (page - 1) * page_size

        where_clauses = ["1=1"]
        params: List[Any] = []

        if inspection_id:
            where_clauses.append("INSPECTION_ID = %s")
            params.append(inspection_id)

        if date_from and date_to:
            where_clauses.append("CREATE_DATE BETWEEN %s AND %s")
            params.extend([date_from, date_to])

        where_sql = " AND ".join(where_clauses)

        count_sql = f"SELECT COUNT(*) AS TOTAL FROM INSPECTIONS WHERE {where_sql}"
        count_result = self.execute_query(count_sql, tuple(params), fetch_one=True)
        total = count_result["TOTAL"] if count_result else 0

        data_sql = f"""
            SELECT {_SELECT_COLUMNS}
            FROM INSPECTIONS
            WHERE {where_sql}
            ORDER BY CREATE_DATE DESC
            LIMIT %s OFFSET %s
        """
        rows = self.execute_query(
            data_sql, tuple(params + [page_size, offset]), fetch_all=True
        ) or []

        return [self._row_to_dict(row) for row in rows], total

    def delete_many(self, inspection_ids: Sequence[str]) -> int:
        """
        Delete inspections by inspectionID.

        Returns:
            Number of deleted rows
        """
        ids = list(dict.fromkeys(inspection_ids))
        if not ids:
            return 0

        placeholders = ", ".join(["%s"] * len(ids))
        sql = f"DELETE FROM INSPECTIONS WHERE INSPECTION_ID IN ({placeholders})"
        deleted = self.execute_query(sql, tuple(ids), commit=True)
        return int(deleted or 0)

    def _row_to_dict(self, row: Dict[str, Any]) -> Dict[str, Any]:
        """Convert Snowflake row to inspection dict."""
        return {
            "inspection_id": row["INSPECTION_ID"],
            "name": row["NAME"],
            "standard_id": int(row["STANDARD_ID"]) if row["STANDARD_ID"] is not None else None,
            "standard_name": row["STANDARD_NAME"],
            "standard_data": self.from_variant(row.get("STANDARD_DATA"), []),
            "total_sample": int(row["TOTAL_SAMPLE"] or 0),
            "defect_rice": self.from_variant(row.get("DEFECT_RICE"), []),
            "note": row.get("NOTE"),
            "price": float(row["PRICE"]) if row.get("PRICE") is not None else None,
            "sampling_point": self.from_variant(row.get("SAMPLING_POINT"), []),
            "sampling_date": self.normalize_timestamp(row.get("SAMPLING_DATE")),
            "image_link": row.get("IMAGE_LINK"),
            "create_date": self.normalize_timestamp(row.get("CREATE_DATE")),
        }
