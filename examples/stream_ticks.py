#!/usr/bin/env python3
"""
Example: Streaming a song

Reads the header up front and decodes note blocks one tick at a time.
Stopping early is fine: leaving the with block closes the file.
"""

import sys

sys.path.insert(0, "..")

import nbsreader


def main():
    path = sys.argv[1] if len(sys.argv) > 1 else "song.nbs"

    with nbsreader.read(path) as song:
        print(f"{song.header.song_name} by {song.header.song_author}")
        print()

        for tick in song.ticks:
            keys = " ".join(f"L{block.layer}:{block.key}" for block in tick)
            print(f"  tick {tick.tick:5d}  {keys}")

            if tick.tick >= song.header.loop_start_tick + 64:
                print("  ...")
                break


if __name__ == "__main__":
    main()
