"""
Live view of the Steam process-group sampler.
Run this while Steam verifies a game to see how CPU time and handle
counts move, which helps pick idle/noise thresholds.

Expected behavior:
- Deltas well above 0.01 while a verification is running
- Deltas at or near zero once Steam is idle
- "client not running" when Steam is closed
"""

import sys
import os
import time
import logging

# Add parent directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from bulkverify.core.monitor.process_sampler import ProcessGroupSampler
from bulkverify.shared.config import AppConfig

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s'
)

def main():
    cfg = AppConfig()
    print("=" * 60)
    print("Steam activity sampler")
    print("Watching:", ", ".join(cfg.process_names))
    print("=" * 60)

    sampler = ProcessGroupSampler(cfg.process_names)
    previous = None
    sample_count = 0

    try:
        while True:
            sample = sampler.sample()
            sample_count += 1

            if sample is None:
                print(f"[{sample_count:4d}] client not running")
                previous = None
            else:
                delta = sample.delta(previous) if previous else 0.0
                marker = "busy" if delta > cfg.noise_threshold else "idle"
                print(
                    f"[{sample_count:4d}] cpu={sample.cpu_time:10.2f}s "
                    f"handles={sample.handle_count:6d} procs={sample.process_count:2d} "
                    f"delta={delta:8.3f} {marker}"
                )
                previous = sample

            time.sleep(cfg.poll_interval_ms / 1000.0)

    except KeyboardInterrupt:
        print()
        print("Stopped by user")

    return 0

if __name__ == "__main__":
    sys.exit(main())
