#!/usr/bin/env python
#    propshatest/xmltest.py - test cases for Propsha over XML strings
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
import io, math, unittest
import xml.etree.ElementTree as ET
from datetime import datetime, timezone

from propsha.XML import dump, dumps, load, loads, marshal, unmarshal
import propshatest
from propshatest import Boxed, Derived, Faulty, Person, Primitives, Unsupported

__version__ = "0.1"
__author__ = "Shawn Sulma <genosha@470th.org>"

LEGACY = b"""<?xml version="1.0" encoding="UTF-8" standalone="no"?>
<properties>
  <!-- written by another tool -->
  <appName type="java.lang.String"><![CDATA[Cinnamon <&> "quoted"]]></appName>
  <count type="int" value="15"/>
  <ratio type="double" value="1.0E10"/>
  <single type="float" value="3.5"/>
  <flag type="boolean" value="TRUE"/>
  <when type="java.util.Date" value="2014-03-09T17:05:22.041-0600"/>
  <tags type="java.util.List" value="[a, b]"/>
  <?ignored instruction?>
</properties>
"""

class Loose ( object ) :
    def __init__ ( self ) :
        self.count = 0
        self.label = "none"
    def getCount ( self ) :
        return self.count
    def setCount ( self, count : int ) :
        self.count = count
    def getLabel ( self ) :
        return self.label
    def setLabel ( self, label : str ) :
        self.label = label

class PropshaXMLTests ( propshatest.PropshaTests ) :
    def setUp ( self ) :
        self.marshal = dumps
        self.unmarshal = loads

    def _root ( self, obj ) :
        return ET.fromstring( dumps( obj ) )

    def testDocumentShape ( self ) :
        """Every property is a child of <properties> with a type and a value attribute"""
        root = self._root( Primitives.filled() )
        assert root.tag == 'properties'
        assert [ e.tag for e in root ] == [ 'flag', 'active', 'small', 'when', 'ratio', 'single', 'count', 'total', 'shortish', 'appName' ]
        types = dict( ( e.tag, e.get( 'type' ) ) for e in root )
        assert types == { 'flag' : 'boolean', 'active' : 'boolean', 'small' : 'byte', 'when' : 'java.util.Date'
            , 'ratio' : 'double', 'single' : 'float', 'count' : 'int', 'total' : 'long', 'shortish' : 'short'
            , 'appName' : 'java.lang.String' }
        assert root.find( 'count' ).get( 'value' ) == '7'
        assert root.find( 'flag' ).get( 'value' ) == 'true'
        assert root.find( 'when' ).get( 'value' ) == '2014-03-09T17:05:22.041-0600'

    def testBoxedTypeNames ( self ) :
        root = self._root( Boxed.filled() )
        types = dict( ( e.tag, e.get( 'type' ) ) for e in root )
        assert types == { 'flag' : 'java.lang.Boolean', 'small' : 'java.lang.Byte', 'ratio' : 'java.lang.Double'
            , 'single' : 'java.lang.Float', 'count' : 'java.lang.Integer', 'total' : 'java.lang.Long'
            , 'shortish' : 'java.lang.Short' }

    def testStringIsText ( self ) :
        """Strings are stored as element text, never as a value attribute"""
        data = Primitives.filled()
        data.setAppName( 'x < y & "z"' )
        element = self._root( data ).find( 'appName' )
        assert element.get( 'value' ) is None
        assert element.text == 'x < y & "z"'
        assert list( element.keys() ) == [ 'type' ]

    def testIndentation ( self ) :
        text = dumps( Primitives.filled() )
        assert text.startswith( b"<?xml version='1.0' encoding='utf-8'?>\n<properties>\n  <flag " )
        assert b'\n  <count type="int" value="7" />\n' in text
        assert text.endswith( b"</properties>" )

    def testLegacyDocument ( self ) :
        """Documents written elsewhere, with CDATA and comments, load"""
        result = loads( LEGACY, Primitives() )
        assert result.getAppName() == 'Cinnamon <&> "quoted"'
        assert result.getCount() == 15
        assert result.getRatio() == 1e10
        assert result.getSingle() == 3.5
        assert result.getFlag() is True
        assert result.getWhen() == datetime( 2014, 3, 9, 23, 5, 22, 41000, tzinfo = timezone.utc )
        assert result.getTotal() == 0

    def testUnknownTypeIgnored ( self ) :
        """An element of an unknown type is skipped, the rest still load"""
        doc = b'<properties><count type="int" value="5"/><thing type="com.example.Thing" value="x"/></properties>'
        result = loads( doc, Primitives() )
        assert result.getCount() == 5

    def testTypeMismatchSkipped ( self ) :
        """A setter taking another kind than the element's type is not called"""
        doc = b'<properties><age type="int" value="30"/><name type="java.lang.String">Ann</name></properties>'
        result = loads( doc, Person() )
        assert result.age is None
        assert result.name == "Ann"
        result = loads( doc.replace( b'"int"', b'"long"' ), Person() )
        assert result.age == 30

    def testUnparsableSkipped ( self ) :
        doc = b"""<properties>
            <count type="int" value="seven"/>
            <small type="byte" value="300"/>
            <when type="java.util.Date" value="yesterday"/>
            <ratio type="double"/>
            <flag type="boolean" value="true"/>
        </properties>"""
        result = loads( doc, Primitives() )
        assert result.getCount() == 0
        assert result.getSmall() == 0
        assert result.getWhen() == Primitives().getWhen()
        assert result.getRatio() == 0.0
        assert result.getFlag() is True

    def testMissingTypeSkipped ( self ) :
        result = loads( b'<properties><count value="3"/></properties>', Primitives() )
        assert result.getCount() == 0

    def testFaultySetter ( self ) :
        """A setter that raises skips only its own property"""
        doc = b'<properties><count type="int" value="-1"/><name type="java.lang.String">ok</name></properties>'
        result = loads( doc, Faulty() )
        assert result.count == 0
        assert result.name == "ok"

    def testFaultyGetter ( self ) :
        """A getter that raises is written with an empty value"""
        element = self._root( Faulty() ).find( 'broken' )
        assert element.get( 'type' ) == 'int'
        assert element.get( 'value' ) == ''

    def testNoneValues ( self ) :
        """Absent boxed values are written empty and do not overwrite numbers on load"""
        root = self._root( Boxed() )
        assert all( e.get( 'value' ) == '' for e in root )
        result = loads( dumps( Boxed() ), Boxed.filled() )
        assert result.count == 123456
        assert result.ratio == 2.5e-8
        assert result.flag is False

    def testUnsupportedWritten ( self ) :
        """Properties of unsupported types are written with their str() value"""
        root = self._root( Unsupported( name = "x" ) )
        assert root.find( 'tags' ).get( 'type' ) == 'list'
        assert root.find( 'tags' ).get( 'value' ) == '[]'
        assert root.find( 'settings' ).get( 'type' ) == 'propshatest.Primitives'
        assert root.find( 'name' ).text == 'x'

    def testInheritedAccessorsIgnored ( self ) :
        """Only accessors declared by the object's own class are used"""
        assert len( self._root( Derived.filled() ) ) == 0
        result = loads( dumps( Primitives.filled() ), Derived() )
        assert result.getCount() == 0
        assert result.getAppName() == "untitled"

    def testUndeclaredGetter ( self ) :
        """Without a return annotation the value's class names the type"""
        data = Loose()
        data.count, data.label = 4, "four"
        root = self._root( data )
        assert root.find( 'count' ).get( 'type' ) == 'int'
        assert root.find( 'label' ).get( 'type' ) == 'java.lang.String'
        result = loads( dumps( data ), Loose() )
        assert ( result.count, result.label ) == ( 4, "four" )

    def testEmptyDocument ( self ) :
        data = Primitives.filled()
        assert loads( b'<properties/>', data ) is data
        assert data.getCount() == 7

    def testNonElementsIgnored ( self ) :
        doc = b'<properties><!-- c --><?pi x?>text<count type="int" value="2"/>tail</properties>'
        assert loads( doc, Primitives() ).getCount() == 2

    def testFileObjects ( self ) :
        """dump and load work on binary file objects"""
        f = io.BytesIO()
        dump( Primitives.filled(), f )
        f.seek( 0 )
        result = load( f, Primitives() )
        assert propshatest.snapshot( result ) == propshatest.snapshot( Primitives.filled() )

    def testMarshalTree ( self ) :
        tree = marshal( Primitives.filled() )
        assert tree.getroot().tag == 'properties'
        result = unmarshal( tree, Primitives() )
        assert result.getShortish() == -300
        assert unmarshal( tree.getroot(), Primitives() ).getShortish() == -300

    def testUnrepresentableText ( self ) :
        """Characters XML 1.0 cannot carry are refused rather than written"""
        for text in ( "a\x0bb", "nul\x00", "\ufffe" ) :
            data = Primitives.filled()
            data.setAppName( text )
            self.assertRaises( ValueError, dumps, data )
        data = Primitives.filled()
        data.setAppName( "tab\tnewline\ncr\r" )
        assert self._root( data ).find( 'appName' ).text.startswith( "tab\tnewline" )

    def testNaN ( self ) :
        data = Primitives.filled()
        data.setRatio( float( 'nan' ) )
        assert self._root( data ).find( 'ratio' ).get( 'value' ) == 'NaN'
        assert math.isnan( loads( dumps( data ), Primitives() ).getRatio() )

if __name__ == "__main__":
    unittest.main()
