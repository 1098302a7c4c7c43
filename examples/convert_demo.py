"""Minimal demonstration of the conversion pipeline."""

from usfm_converter.api.service import convert_notes

if __name__ == "__main__":
    notes = (
        "John 3:16 For God so loved the world that he gave his one and only Son.\n"
        "NOTE: Or his only begotten Son. [See Romans 5:8]\n"
        "Study note (Love): God's love reaches the whole world."
    )
    result = convert_notes(notes)
    if result["success"]:
        print(result["usfm"])
    else:
        print("Conversion failed:", result["error"])
