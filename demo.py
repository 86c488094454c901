#!/usr/bin/env python3
"""
hl7wire Demo Script.

This script walks through the core message model:
1. Parsing an ADT message whose header declares the delimiters.
2. Reading fields, components and subcomponents.
3. Editing segments and re-sequencing repeated OBX segments.
4. Building a new message from scratch with a deterministic header.

Usage:
    python demo.py
"""

import os
import sys
from datetime import datetime

import numpy as np

# Ensure src is in python path
sys.path.append(os.path.join(os.getcwd(), "src"))

try:
    from hl7wire.common.errors import HL7Error
    from hl7wire.model import ControlSegment, Message, Segment, parse_message
except ImportError as e:
    print(f"Error importing modules: {e}")
    print("Please ensure you have installed dependencies via pip install -e .")
    sys.exit(1)

ORU_R01_MESSAGE = (
    "MSH|^~\\&|LAB|HOSP|EHR|HOSP|20250101140000||ORU^R01|MSG002|P|2.5\r"
    "PID|||PAT001^^^HOSP^MR||DOE^JOHN\r"
    "OBX|1|NM|2160-0^Creatinine^LN||1.2|mg/dL|0.7-1.3||||F\r"
    "OBX|2|NM|6690-2^WBC^LN||15.5|10*3/uL|4.5-11.0|H|||F\r"
    "OBX|3|ST|6463-4^Bacteria identified^LN||E.coli||||||F\r"
)


def run_demo():
    print("========================================")
    print("   hl7wire Message Model Demo")
    print("========================================")

    # 1. Parse
    print("\n[1] Parsing ORU^R01 message...")
    message = parse_message(ORU_R01_MESSAGE)
    print(f"    -> Segments: {[segment.name for segment in message]}")
    print(f"    -> Is ORU^R01: {message.is_message_type('ORU', 'R01')}")
    print(f"    -> HL7 version: {message.config.hl7_version}")

    # 2. Read fields
    print("\n[2] Reading fields...")
    pid = message.get_first_segment_instance("PID")
    print(f"    -> PID-3: {pid.get_field(3).to_native()}")
    print(f"    -> PID-5: {message.get_segment_field_as_string(1, 5)}")

    # 3. Edit
    print("\n[3] Removing the second OBX and re-sequencing...")
    message.remove_segment(message.get_segments_by_name("OBX")[1], reindex=True)
    for obx in message.get_segments_by_name("OBX"):
        print(f"    -> {message.segment_to_string(obx)}")

    # 4. Build
    print("\n[4] Building a new message...")
    msh = ControlSegment([], clock=lambda: datetime(2025, 1, 1, 12, 0, 0), rng=np.random.RandomState(7))
    msh.set_sending_application("HL7WIRE")
    msh.set_message_type("ADT")
    msh.set_trigger_event("A01")
    built = Message()
    built.add_segment(msh)
    built.add_segment(Segment("PID", ["1", "", ["PAT002", "", "", "HOSP", "MR"]]))
    try:
        print(built.serialize().replace("\n", "\n    "))
    except HL7Error as e:
        print(f"    Error: {e}")

    print("\n========================================")
    print("Demo complete.")


if __name__ == "__main__":
    run_demo()
