import csv
import io
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

COLUMNS = ("sequence", "date", "observer", "method", "value", "uncertainty")

SPEED_OF_LIGHT_CSV = """sequence,date,observer,method,value,uncertainty
1,1676,Rømer and Huygens,Jupiter satellites,220000,0
2,1729,Bradley,Stellar aberration,301000,0
3,1849,Fizeau,Toothed wheel,315000,0
4,1861,Glasenapp,Jupiter satellites,300050,
5,1862,Foucault,Rotating mirror,298000,500
6,1868,Maxwell,Electromagnetic constant,284300,0
7,1872,Cornu,Toothed wheel,298500,900
8,1874,Cornu,Toothed wheel,300400,300
9,1875,Helmert,Toothed wheel,299990,200
10,1879,Michelson,Rotating mirror,299910,50
11,1880,Rowland,Electromagnetic constant,298500,500
12,1881,Young and Forbes,Toothed wheel,301382,0
13,1882,Newcomb,Rotating mirror,299860,30
14,1882.7,Michelson,Rotating mirror,299853,60
15,1888,Himstedt,Electromagnetic constant,300570,1000
16,1891,Blondlot,Standing waves,297600,0
17,1897,Saunders,Standing waves,299920,300
18,1902,Perrotin,Toothed wheel,299860,80
19,1906,Rosa and Dorsey,Electromagnetic constant,299781,10
20,1923,Mercier,Standing waves,299782,15
21,1926,Michelson,Rotating mirror,299796,4
22,1928,Karolus and Mittelstaedt,Kerr cell,299778,10
23,1935,"Michelson, Pease and Pearson",Rotating mirror,299774,11
24,1940,Hüttel,Kerr cell,299768,10
25,1947,Essen and Gordon-Smith,Cavity resonator,299792,3
26,1949,Aslakson,Shoran radar,299792.4,2.4
27,1949.5,Bergstrand,Geodimeter,299796,2
28,1950,Essen,Cavity resonator,299792.5,1
29,1950.2,Hansen and Bol,Cavity resonator,299794.3,1.2
30,1950.5,Bergstrand,Geodimeter,299793.1,0.26
31,1951,Bol,Cavity resonator,299789.3,0.4
32,1951.5,Aslakson,Shoran radar,299794.2,1.4
33,1951.8,Froome,Microwave interferometer,299792.6,0.7
34,1953,Bergstrand,Geodimeter,299792.85,0.16
35,1954,Froome,Microwave interferometer,299792.75,0.3
36,1954.5,Florman,Radio interferometer,299795.1,3.1
37,1954.7,Rank et al.,Band spectrum,299791.9,2
38,1955,Plyler et al.,Band spectrum,299792,6
39,1956,Edge,Geodimeter,299792.4,0.11
40,1956.5,Wadley,Tellurometer,299792.9,2
41,1957,Rank et al.,Band spectrum,299791.5,1
42,1958,Froome,Microwave interferometer,299792.5,0.1
43,1965,Kolibayev,Geodimeter,299792.6,0.06
44,1966,Karolus,Modulated light,299792.44,0.2
45,1967,Simkin et al.,Microwave interferometer,299792.56,0.11
46,1967.5,Grosse,Geodimeter,299792.5,0.05
47,1972,Bay et al.,Laser interferometry,299792.462,0.018
48,1972.5,Evenson et al.,Laser interferometry,299792.4562,0.0011
49,1973,Baird et al.,Laser interferometry,299792.4587,0.0011
50,1974,Blaney et al.,Laser interferometry,299792.459,0.0008
51,1976,Woods et al.,Laser interferometry,299792.4588,0.0002
52,1978,Baird et al.,Laser interferometry,299792.4581,0.0019
53,1979,Jennings et al.,Laser interferometry,299792.4586,0.0003
54,1980,Hall et al.,Laser interferometry,299792.4585,0.0004
55,1981,Jennings et al.,Laser interferometry,299792.4586,0.0003
56,1982,Blaney et al.,Laser interferometry,299792.4588,0.0002
57,1983,CGPM,Definition of the metre,299792.458,0
"""


@dataclass(frozen=True)
class Measurement:
    sequence: int
    year: float
    observer: str
    method: str
    value: float
    uncertainty: float


PLACEHOLDER = Measurement(sequence=0, year=0.0, observer="", method="", value=0.0, uncertainty=0.0)


@dataclass(frozen=True)
class Decoded:
    records: tuple[Measurement, ...]


@dataclass(frozen=True)
class DecodeFailed:
    reason: str


def parse_int(text: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        logger.debug("Non-integer field %r, using 0", text)
        return 0


def parse_float(text: str) -> float:
    try:
        return float(text.strip())
    except ValueError:
        logger.debug("Non-numeric field %r, using 0.0", text)
        return 0.0


def decode_measurements(text: str) -> Decoded | DecodeFailed:
    """Decode the CSV table into measurements.

    Any structural problem (missing header, a row without exactly six fields,
    a csv.Error) fails the whole table. Numeric fields are converted one by
    one and fall back to zero on their own.
    """
    try:
        rows = [row for row in csv.reader(io.StringIO(text)) if row]
    except csv.Error as exc:
        return DecodeFailed(f"csv error: {exc}")

    if not rows:
        return DecodeFailed("no header row")

    header, body = rows[0], rows[1:]
    if len(header) != len(COLUMNS):
        return DecodeFailed(f"header has {len(header)} fields, expected {len(COLUMNS)}")

    records = []
    for line_no, row in enumerate(body, start=2):
        if len(row) != len(COLUMNS):
            return DecodeFailed(f"row {line_no} has {len(row)} fields, expected {len(COLUMNS)}")
        sequence, date, observer, method, value, uncertainty = row
        records.append(
            Measurement(
                sequence=parse_int(sequence),
                year=parse_float(date),
                observer=observer.strip(),
                method=method.strip(),
                value=parse_float(value),
                uncertainty=parse_float(uncertainty),
            )
        )

    return Decoded(tuple(records))


def load_measurements(text: str) -> tuple[Measurement, ...]:
    result = decode_measurements(text)
    if isinstance(result, DecodeFailed):
        logger.warning("Could not decode measurement table (%s); using placeholder record", result.reason)
        return (PLACEHOLDER,)
    return result.records


MEASUREMENTS = load_measurements(SPEED_OF_LIGHT_CSV)
