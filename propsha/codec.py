#    propsha/codec.py - scalar type codec for Propsha.
#    Copyright (C) 2009 Shawn Sulma <genosha@470th.org>
#
#    This program is free software: you can redistribute it and/or modify
#    it under the terms of the GNU General Public License as published by
#    the Free Software Foundation, either version 3 of the License, or
#    (at your option) any later version.
#
#    This program is distributed in the hope that it will be useful,
#    but WITHOUT ANY WARRANTY; without even the implied warranty of
#    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#    GNU General Public License for more details.
#
#    You should have received a copy of the GNU General Public License
#    along with this program.  If not, see <http://www.gnu.org/licenses/>.
r"""propsha/codec.py holds the closed table of property types that Propsha can both write
and read back.  Each type is a member of :class:`Kind` and carries the name used for it in
the ``type`` attribute of a document, along with the functions that turn a value into text
and back again.

The type names are those used by existing property documents:

    ``boolean``, ``byte``, ``double``, ``float``, ``int``, ``long``, ``short`` - the
    "primitive" kinds.

    ``java.lang.Boolean``, ``java.lang.Byte``, ``java.lang.Double``, ``java.lang.Float``,
    ``java.lang.Integer``, ``java.lang.Long``, ``java.lang.Short`` - the "boxed" (nullable)
    forms of the same.

    ``java.util.Date`` and ``java.lang.String``.

Accessors select their kind through annotations.  Python has a single integer type and a
single float type, so the narrower ones are spelled with the ``NewType``s defined here
(:data:`Byte`, :data:`Short`, :data:`Long` and :data:`Float`, the last being single
precision), and the boxed forms with ``Optional[...]``::

    def getCount ( self ) -> Long : ...
    def setRatio ( self, ratio : Optional[float] ) : ...   # java.lang.Double
"""
import math, re, struct, types, typing
from datetime import datetime, timedelta
from enum import Enum
from typing import NewType, Union

__version__ = "0.1"
__author__ = "Shawn Sulma <genosha@470th.org>"
__all__ = [ 'Kind', 'Byte', 'Short', 'Long', 'Float', 'decode', 'encode', 'kind_of', 'type_name', 'DATE_FORMAT' ]

Byte = NewType( 'Byte', int )
Short = NewType( 'Short', int )
Long = NewType( 'Long', int )
Float = NewType( 'Float', float )

# yyyy-MM-dd'T'HH:mm:ss.SSSZ, e.g. 2014-03-09T17:05:22.041-0600; the milliseconds are
# matched by _DATE and counted as a whole number, so ".41" is 41ms, not 410ms
DATE_FORMAT = '%Y-%m-%dT%H:%M:%S%z'
_DATE = re.compile( r'([^.]+)\.([0-9]+)([+-][0-9]{4})' )

_INTEGER = re.compile( r'[+-]?[0-9]+' )
_DECIMAL = re.compile( r'([+-]?)(?:(NaN)|(Infinity)|(?:(0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+)'
    r'|((?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?))[fFdD]?)' )

def _parse_boolean ( text ) :
    return text.lower() == 'true'

def _render_boolean ( value ) :
    return 'true' if value else 'false'

def _integral ( bits ) :
    low, high = -( 1 << ( bits - 1 ) ), ( 1 << ( bits - 1 ) ) - 1
    def parse ( text ) :
        if not _INTEGER.fullmatch( text ) :
            raise ValueError( "not an integer: %r" % text )
        value = int( text )
        if not low <= value <= high :
            raise ValueError( "%d is out of range for %d bits" % ( value, bits ) )
        return value
    return parse

def _render_integral ( value ) :
    return str( int( value ) )

def _parse_double ( text ) :
    match = _DECIMAL.fullmatch( text.strip() )
    if not match :
        raise ValueError( "not a number: %r" % text )
    sign, nan, infinity, hexadecimal, number = match.groups()
    if nan :
        return math.nan
    if infinity :
        return -math.inf if sign == '-' else math.inf
    if hexadecimal :
        return float.fromhex( sign + hexadecimal )
    return float( sign + number )

def _render_double ( value ) :
    value = float( value )
    if math.isnan( value ) :
        return 'NaN'
    if math.isinf( value ) :
        return 'Infinity' if value > 0 else '-Infinity'
    return repr( value )

def _single ( value ) :
    try :
        return struct.unpack( '<f', struct.pack( '<f', value ) )[0]
    except OverflowError :
        return math.copysign( math.inf, value )

def _parse_float ( text ) :
    return _single( _parse_double( text ) )

def _render_float ( value ) :
    value = _single( float( value ) )
    if math.isnan( value ) or math.isinf( value ) :
        return _render_double( value )
    # shortest digit string that still reads back as the same single
    for digits in range( 1, 10 ) :
        text = '%.*g' % ( digits, value )
        if _single( float( text ) ) == value :
            break
    return repr( float( text ) )

def _parse_date ( text ) :
    match = _DATE.fullmatch( text )
    if not match :
        raise ValueError( "not a date: %r" % text )
    seconds, millis, zone = match.groups()
    return datetime.strptime( seconds + zone, DATE_FORMAT ) + timedelta( milliseconds = int( millis ) )

def _render_date ( value ) :
    if value.tzinfo is None or value.utcoffset() is None :
        value = value.astimezone()
    minutes = int( value.utcoffset() // timedelta( minutes = 1 ) )
    return "%04d-%02d-%02dT%02d:%02d:%02d.%03d%s%02d%02d" % ( value.year, value.month, value.day
        , value.hour, value.minute, value.second, value.microsecond // 1000
        , '-' if minutes < 0 else '+', abs( minutes ) // 60, abs( minutes ) % 60 )

def _parse_string ( text ) :
    return text

def _render_string ( value ) :
    return str( value )

class Kind ( Enum ) :
    r"""The closed set of property kinds, in dispatch order.  Each member knows its document
    type name (``type_name``) and how to ``parse`` and ``render`` its values."""
    BOOLEAN = ( 'boolean', _parse_boolean, _render_boolean )
    BOOLEAN_OBJECT = ( 'java.lang.Boolean', _parse_boolean, _render_boolean )
    BYTE = ( 'byte', _integral( 8 ), _render_integral )
    BYTE_OBJECT = ( 'java.lang.Byte', _integral( 8 ), _render_integral )
    DATE = ( 'java.util.Date', _parse_date, _render_date )
    DOUBLE = ( 'double', _parse_double, _render_double )
    DOUBLE_OBJECT = ( 'java.lang.Double', _parse_double, _render_double )
    FLOAT = ( 'float', _parse_float, _render_float )
    FLOAT_OBJECT = ( 'java.lang.Float', _parse_float, _render_float )
    INT = ( 'int', _integral( 32 ), _render_integral )
    INTEGER = ( 'java.lang.Integer', _integral( 32 ), _render_integral )
    LONG = ( 'long', _integral( 64 ), _render_integral )
    LONG_OBJECT = ( 'java.lang.Long', _integral( 64 ), _render_integral )
    SHORT = ( 'short', _integral( 16 ), _render_integral )
    SHORT_OBJECT = ( 'java.lang.Short', _integral( 16 ), _render_integral )
    STRING = ( 'java.lang.String', _parse_string, _render_string )

    def __init__ ( self, type_name, parse, render ) :
        self.type_name = type_name
        self.parse = parse
        self.render = render

    @classmethod
    def named ( cls, type_name ) :
        r"""Returns the kind whose document name is ``type_name``, or None."""
        return _names.get( type_name )

    def __repr__ ( self ) :
        return "<Kind.%s: %s>" % ( self.name, self.type_name )

_names = dict( ( kind.type_name, kind ) for kind in Kind )

# annotation -> ( plain kind, Optional[...] kind )
_annotations = {
    bool : ( Kind.BOOLEAN, Kind.BOOLEAN_OBJECT ),
    Byte : ( Kind.BYTE, Kind.BYTE_OBJECT ),
    datetime : ( Kind.DATE, Kind.DATE ),
    float : ( Kind.DOUBLE, Kind.DOUBLE_OBJECT ),
    Float : ( Kind.FLOAT, Kind.FLOAT_OBJECT ),
    int : ( Kind.INT, Kind.INTEGER ),
    Long : ( Kind.LONG, Kind.LONG_OBJECT ),
    Short : ( Kind.SHORT, Kind.SHORT_OBJECT ),
    str : ( Kind.STRING, Kind.STRING ),
}

_union_types = tuple( t for t in ( Union, getattr( types, 'UnionType', None ) ) if t is not None )

def _unwrap_optional ( annotation ) :
    if typing.get_origin( annotation ) in _union_types :
        args = typing.get_args( annotation )
        if len( args ) == 2 and type( None ) in args :
            return args[0] if args[1] is type( None ) else args[1], True
    return annotation, False

def kind_of ( annotation ) :
    r"""Maps an accessor annotation onto its :class:`Kind`.  Returns None for annotations
    outside the supported set."""
    if isinstance( annotation, Kind ) :
        return annotation
    annotation, optional = _unwrap_optional( annotation )
    try :
        pair = _annotations.get( annotation )
    except TypeError : # unhashable annotation
        return None
    if pair is None :
        return None
    return pair[1] if optional else pair[0]

def type_name ( annotation ) :
    r"""The name written to the ``type`` attribute for a value declared as ``annotation``.
    Unsupported classes are named by their qualified name; such elements are never read back."""
    kind = kind_of( annotation )
    if kind is not None :
        return kind.type_name
    if isinstance( annotation, type ) :
        if annotation.__module__ == 'builtins' :
            return annotation.__qualname__
        return "%s.%s" % ( annotation.__module__, annotation.__qualname__ )
    return str( annotation )

def decode ( name, text ) :
    r"""Parses ``text`` as a value of the kind called ``name``.  Unknown kinds and text that
    does not parse give None rather than an exception."""
    kind = Kind.named( name )
    if kind is None or text is None :
        return None
    try :
        return kind.parse( text )
    except ( ValueError, OverflowError ) :
        return None

def encode ( kind, value ) :
    r"""Renders ``value`` as the text stored for ``kind``."""
    return kind.render( value )
