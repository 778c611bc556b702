ACPI_CALL_FILE = "/proc/acpi/call"
ACPI_CALL_MODULE = "acpi_call"
DMI_PRODUCT_VERSION_FILE = "/sys/class/dmi/id/product_version"
POWER_SUPPLY_DIR = "/sys/class/power_supply/"
SYSTEM_CONFIG_FILE = "/etc/tpacpi-bat.conf"

GITHUB = "https://github.com/teleshoes/tpacpi-bat"
VERSION = "3.2"

CALL_FAILURE_SENTINEL = 0x80000000
STATUS_WIDTH = 32

# minutes, peak-shift state call
MAX_INHIBIT_MINUTES = 1440
INHIBIT_FOREVER = 65535

# platforms whose battery path does not lead to the HKEY device
ASL_BASE_OVERRIDES = {
    "ThinkPad S2": r"\_SB.PCI0.LPCB.EC0.HKEY",
    "ThinkPad 13 2nd Gen": r"\_SB.PCI0.LPCB.EC.HKEY",
    "ThinkPad Edge E130": r"\_SB.PCI0.LPCB.EC0.HKEY",
    "ThinkPad Edge E330": r"\_SB.PCI0.LPCB.EC0.HKEY",
}
