#!/usr/bin/env python3
"""
tpacpi-bat - ThinkPad battery charge control through ACPI calls.

Reads and writes charge thresholds, charge inhibition, forced discharge
and the peak shift state by calling the firmware's HKEY methods through
the acpi_call kernel module.
"""
