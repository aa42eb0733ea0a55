"""Example: carry *why* a measurement is missing inside the float itself.

Sensor readings arrive as a float32 array.  Instead of a separate mask, each
missing entry is replaced by a quiet NaN whose payload is a reason code
(negative codes for hardware faults, positive for dropped packets).  Ordinary
NaN-aware reductions keep working, and the codes can be recovered later.
"""

from __future__ import annotations

import numpy as np
import torch

from qnan import NaNKind, classify_tensor, decode_tensor, encode_tensor, is_quiet_nan

DROPPED_PACKET = 17
SENSOR_FAULT = -3


def main() -> None:
    readings = torch.from_numpy(np.array([21.5, 21.7, 0.0, 22.1, 0.0, 22.4], dtype=np.float32))
    reasons = torch.tensor([0, 0, DROPPED_PACKET, 0, SENSOR_FAULT, 0])

    missing = reasons != 0
    readings[missing] = encode_tensor(reasons[missing], 32)

    print("mean of valid readings:", float(torch.nanmean(readings)))
    print("kinds:", [NaNKind(int(k)).name for k in classify_tensor(readings)])

    tagged = is_quiet_nan(readings)
    for idx, code in zip(tagged.nonzero().flatten().tolist(), decode_tensor(readings[tagged]).tolist()):
        label = "sensor fault" if code < 0 else "dropped packet"
        print(f"reading {idx}: {label} (code {code})")


if __name__ == "__main__":
    main()
