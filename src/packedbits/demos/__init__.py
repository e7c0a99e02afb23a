"""Small programs built on BitVector: a bloom filter, a boolean network and a benchmark."""
