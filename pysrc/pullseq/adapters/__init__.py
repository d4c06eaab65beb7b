"""Stateful adapters over {py:obj}`~pullseq.sequences.PullSequence`.

Each adapter borrows one or more source sequences, owns whatever
buffer or state it needs, and is itself a
{py:obj}`~pullseq.sequences.PullSequence`. Sources are validated when
the adapter is built.

Most code should use the functions in {py:obj}`pullseq.operators`
instead of building these directly.

"""
