"""
# Flood Areas Example

An example of geocoding a postcode and pulling nearby SEPA flood areas, with their outlines converted from the British National Grid to WGS84
"""


def main():
    import os

    """
    First, we need API keys for the Ordnance Survey Names API and the SEPA flood service.
    Here we read them from environment variables so they don't end up in the code:
    """

    os_key = os.environ["OS_API_KEY"]
    sepa_key = os.environ["SEPA_API_KEY"]

    """
    The OS Names API returns positions as British National Grid eastings and northings.
    The `OsNamesGeocoder` keeps those (we need them to query SEPA) and also converts them to latitude/longitude:
    """

    from gridgeo.sources.os_names import OsNamesGeocoder

    geocoder = OsNamesGeocoder(api_key=os_key)
    location = geocoder.find("EH1 2NG")

    print(location.planar)
    print(location.geographic)

    """
    The conversion uses the built-in `NationalGridTransformer`, which applies the Ordnance Survey's inverse Transverse Mercator formulae and a 7-parameter Helmert shift.
    That is good to a few meters. If you have PROJ with the OSTN15 grid installed you can swap in the `ProjTransformer` for sub-meter results:
    
        from gridgeo.transformers.proj import ProjTransformer
        geocoder = OsNamesGeocoder(api_key=os_key, transformer=ProjTransformer())
    
    Now, let's ask SEPA for the flood areas within 1 kilometer:
    """

    from gridgeo.sources.sepa import SepaFloodClient, flood_areas_to_geodataframe

    client = SepaFloodClient(api_key=sepa_key)
    areas = client.areas_near(location.planar, radius=1000)

    """
    SEPA describes each area's outline as National Grid WKT (`POLYGON ((324100 673900, ...))`).
    The client decodes every outline and converts each vertex, so the geometries come back in (longitude, latitude) order, ready for GeoJSON.
    An outline that can't be decoded leaves that area's geometry as None and logs a warning.
    
    Let's put the areas in a GeoDataFrame and save them:
    """

    gdf = flood_areas_to_geodataframe(areas)
    gdf.to_file("flood_areas.geojson", driver="GeoJSON")

    """
    Finally, we can check for active warnings in the same area:
    """

    for warning in client.warnings_near(location.planar, radius=1000):
        print(f"[{warning.level}] {warning.area_name}: {warning.message}")

    """
    You can also decode WKT directly:
    """

    from gridgeo.wkt.decoder import decode

    polygon = decode("POLYGON ((325000 673000, 325500 673000, 325500 673500, 325000 673000))")
    print(polygon.to_geojson())


if __name__ == "__main__":
    main()
