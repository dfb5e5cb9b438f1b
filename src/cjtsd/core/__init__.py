"""
Core package aggregator for CJTSD contracts (units, schemas, serde, errors).

## Contracts (single source of truth)
- Units — the Unit enum, wire codes and tick scales.
- Schemas — ColumnarRecord (wire shape) and DataPoint/RawDataPoint (expanded form).
- Serde — canonical wire JSON with decimal-preserving numbers.
- Errors/Constants — typed errors and the omission sentinel/threshold.

## Notes
- Zero-IO policy: stdlib + pydantic (+ simplejson in serde); no file/network IO.
- Behaviour (building and expanding records) lives in cjtsd.codec.

## Examples
```python
from cjtsd.core.schema import ColumnarRecord
from cjtsd.core.serde import json_dumps, json_loads

rec = ColumnarRecord(u="s", t=[0, 60, 120], d=[60])
json_loads(json_dumps(rec)) == rec  # True
```
"""
