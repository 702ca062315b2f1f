from fastapi import HTTPException, status


def parse_id(value: str, label: str) -> int:
    """Parse a path id, answering 400 ``Invalid <label> ID`` when it is not an integer."""
    try:
        return int(value)
    except (TypeError, ValueError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid {label} ID")
