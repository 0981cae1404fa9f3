#!/usr/bin/env python3
"""
Example: Basic song analysis

Shows how to read an NBS file eagerly and summarize its note grid.
"""

import sys

sys.path.insert(0, "..")

import nbsreader
from nbsreader.analysis import summarize_ticks


def main():
    path = sys.argv[1] if len(sys.argv) > 1 else "song.nbs"

    song = nbsreader.read_all(path)
    header = song.header

    # Basic info
    print(f"Song Name: {header.song_name}")
    print(f"Author: {header.song_author}")
    print(f"Format Version: {header.version}")
    print(f"Tempo: {header.tempo:.2f} ticks/s")
    print(f"Length: {header.song_length} ticks ({header.duration_seconds:.1f} s)")
    print(f"Time Signature: {header.time_signature}/4")
    print()

    # Grid
    summary = summarize_ticks(song.ticks)
    print(f"Ticks with notes: {summary.tick_count}")
    print(f"Note blocks: {summary.note_count}")
    print(f"Layers used: {summary.layers}")
    print()

    print("Instruments:")
    for instrument, count in sorted(summary.instruments.items()):
        print(f"  {instrument:2d}: {count} notes")


if __name__ == "__main__":
    main()
