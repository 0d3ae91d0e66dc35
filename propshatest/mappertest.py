#!/usr/bin/env python
#    propshatest/mappertest.py - test cases for Propsha over XML files
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
import logging, os, pathlib, shutil, tempfile, unittest
import xml.etree.ElementTree as ET

from propsha import Mapper
import propshatest
from propshatest import Primitives, snapshot

__version__ = "0.1"
__author__ = "Shawn Sulma <genosha@470th.org>"

class Numbered ( object ) :
    def __init__ ( self, count = 0 ) :
        self.count = count
    def get1st ( self ) -> int : return 5
    def getCount ( self ) -> int : return self.count
    def setCount ( self, count : int ) : self.count = count

class PropshaMapperTests ( propshatest.PropshaTests ) :
    def setUp ( self ) :
        self.directory = tempfile.mkdtemp()
        self.path = os.path.join( self.directory, "properties.xml" )
        self.reports = []
        self.marshal = self._save
        self.unmarshal = self._load

    def tearDown ( self ) :
        shutil.rmtree( self.directory, ignore_errors = True )

    def _report ( self, severity, message, error = None ) :
        self.reports.append( ( severity, message, error ) )

    def _save ( self, data ) :
        Mapper( self.path, reporter = self._report ).save( data )
        return self.path

    def _load ( self, path, instance ) :
        return Mapper( path, reporter = self._report ).load( instance )

    def testNoReports ( self ) :
        self._perform( Primitives.filled() )
        assert self.reports == []

    def testConstructionDoesNoIO ( self ) :
        mapper = Mapper( self.path )
        assert mapper.path == self.path
        assert not os.path.exists( self.path )

    def testPathLike ( self ) :
        mapper = Mapper( pathlib.Path( self.path ), reporter = self._report )
        assert mapper.path == self.path
        mapper.save( Primitives.filled() )
        assert mapper.load( Primitives() ).getCount() == 7

    def testMissingFile ( self ) :
        """Loading from a file that does not exist leaves the instance alone"""
        data = Primitives()
        result = Mapper( os.path.join( self.directory, "absent.xml" ), reporter = self._report ).load( data )
        assert result is data
        assert snapshot( result ) == snapshot( Primitives() )
        assert self.reports == []

    def testCorruptFile ( self ) :
        """A file that does not parse is reported as a warning and loads nothing"""
        with open( self.path, "wb" ) as f :
            f.write( b"<properties><count type='int' value='3'" )
        data = Primitives.filled()
        result = Mapper( self.path, reporter = self._report ).load( data )
        assert result is data
        assert result.getCount() == 7
        assert len( self.reports ) == 1
        severity, message, error = self.reports[0]
        assert severity == logging.WARNING
        assert self.path in message
        assert isinstance( error, ET.ParseError )

    def testDirectoryPath ( self ) :
        data = Primitives()
        assert Mapper( self.directory, reporter = self._report ).load( data ) is data
        assert [ r[0] for r in self.reports ] == [ logging.WARNING ]

    def testUnwritablePath ( self ) :
        """A failed save is reported as an error, not raised"""
        path = os.path.join( self.directory, "missing", "properties.xml" )
        Mapper( path, reporter = self._report ).save( Primitives.filled() )
        assert not os.path.exists( path )
        assert len( self.reports ) == 1
        severity, message, error = self.reports[0]
        assert severity == logging.ERROR
        assert isinstance( error, OSError )

    def testDefaultReporterLogs ( self ) :
        with open( self.path, "wb" ) as f :
            f.write( b"not xml at all" )
        with self.assertLogs( "propsha.XML", level = "WARNING" ) as logs :
            Mapper( self.path ).load( Primitives() )
        assert len( logs.records ) == 1
        assert logs.records[0].exc_info is not None

    def testFileContents ( self ) :
        Mapper( self.path ).save( Primitives.filled() )
        with open( self.path, "rb" ) as f :
            text = f.read()
        assert text.startswith( b"<?xml version='1.0' encoding='utf-8'?>\n<properties>\n" )
        assert b'  <appName type="java.lang.String">Cinnamon</appName>\n' in text
        assert b'  <total type="long" value="1099511627776" />\n' in text

    def testNameNotAnElement ( self ) :
        """A property whose name cannot be an element is left out, the rest still load"""
        mapper = Mapper( self.path, reporter = self._report )
        mapper.save( Numbered( 9 ) )
        with open( self.path, "rb" ) as f :
            text = f.read()
        assert b"1st" not in text
        assert mapper.load( Numbered() ).getCount() == 9
        assert self.reports == []

    def testUnrepresentableText ( self ) :
        """A string XML cannot carry fails the save and keeps the previous file"""
        mapper = Mapper( self.path, reporter = self._report )
        mapper.save( Primitives.filled() )
        data = Primitives.filled()
        data.setCount( 8 )
        data.setAppName( "a\x0bb" )
        mapper.save( data )
        assert len( self.reports ) == 1
        severity, message, error = self.reports[0]
        assert severity == logging.ERROR
        assert isinstance( error, ValueError )
        result = mapper.load( Primitives() )
        assert result.getCount() == 7
        assert result.getAppName() == "Cinnamon"
        assert len( self.reports ) == 1

    def testSaveOverwrites ( self ) :
        mapper = Mapper( self.path, reporter = self._report )
        mapper.save( Primitives.filled() )
        mapper.save( Primitives() )
        assert snapshot( mapper.load( Primitives.filled() ) ) == snapshot( Primitives() )

if __name__ == "__main__":
    unittest.main()
