from gridgeo.wkt.decoder import WKTDecoder, decode, parse_planar

__all__ = ["WKTDecoder", "decode", "parse_planar"]
